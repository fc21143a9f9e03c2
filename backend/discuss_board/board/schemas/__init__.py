"""Request and response DTOs for the discussion board API."""
