"""Core execution layer: cancellation, command building, running and orchestration."""
