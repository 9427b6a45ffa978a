"""Infrastructure services (logging) for the progress provider."""
