"""Configuration: settings and logging for the typeshape CLI."""
