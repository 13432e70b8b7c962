"""Desktop host for the business card renderer."""
