"""Qt front end for the curve editor."""
