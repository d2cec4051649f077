"""Infrastructure shared across features: logging, filesystem and OS tooling."""
