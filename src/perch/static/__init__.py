"""Static file resolution: URL path -> file on disk, plus content types."""
