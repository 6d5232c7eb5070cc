"""DSPy agents for template selection and caption generation."""
