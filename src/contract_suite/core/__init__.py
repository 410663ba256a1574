"""Input-side collaborators of the engine: document parsers and records."""
