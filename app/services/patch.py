from pydantic import BaseModel

from app.models.timestamps import utcnow


def build_patch(update: BaseModel, columns: tuple[str, ...]) -> list[tuple[str, object]]:
    """Return (column, value) pairs for the fields the client actually sent.

    A field sent as null is kept (it clears the column); a field left out is
    skipped, so its stored value survives.
    """
    present = update.model_dump(exclude_unset=True)
    return [(column, present[column]) for column in columns if column in present]


def apply_patch(row, patch: list[tuple[str, object]]) -> None:
    for column, value in patch:
        setattr(row, column, value)
    row.updated_at = utcnow()
