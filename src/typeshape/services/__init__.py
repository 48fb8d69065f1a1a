"""Service layer: CLI-facing operations returning OperationResult."""
