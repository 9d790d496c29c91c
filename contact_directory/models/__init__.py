from contact_directory.models.contact import Contact

__all__ = [
    "Contact",
]
