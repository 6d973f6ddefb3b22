import uuid


def is_uuid(value: str) -> bool:
    """Primary keys are uuids; anything else cannot name a row"""
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True
