"""Output layer — result formatting and sinks."""
