"""Spanish Profesor — beginner Spanish question answering with grounded tools."""
