"""Infrastructure layer — SQLAlchemy and pydantic metadata readers."""
