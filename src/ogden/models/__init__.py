"""Problem drivers built on ogden.physics."""
