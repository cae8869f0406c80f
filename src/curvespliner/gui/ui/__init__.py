"""User interface layer: controllers and widgets."""
