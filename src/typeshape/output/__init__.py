"""Output layer: render OperationResult for humans or machines."""
