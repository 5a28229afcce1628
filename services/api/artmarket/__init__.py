"""Art marketplace API: artists, listings, saved art and relay endpoints."""
