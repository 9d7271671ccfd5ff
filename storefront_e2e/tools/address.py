"""Compose the single "Adres & huisnummer" checkout field."""


def build_address_field(street_name: str, house_number: str, addition: str) -> str:
    """
    Join street name, house number and addition with single spaces.

    Parts that are empty or only whitespace are dropped. Surviving parts are
    passed through untouched, so leading and trailing spaces reach the shop's
    form field as typed.

    Args:
        street_name: Street name, e.g. "Main Street"
        house_number: House number, e.g. "123"
        addition: Dutch house number addition, e.g. "A" or "bis"

    Returns:
        Combined address line
    """
    parts = [street_name, house_number, addition]
    return " ".join(part for part in parts if part.strip() != "")
