"""Authentication container — login providers API and the sign-in page."""
