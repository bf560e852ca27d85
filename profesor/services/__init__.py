"""Services for the Spanish Profesor."""
