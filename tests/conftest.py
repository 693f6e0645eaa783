from rancidness.rules import ITEM_NAMES


def make_cells(overrides=None, default=("No", "3", "2")):
    """A full data row: three metadata cells then one triplet per item."""
    overrides = overrides or {}
    cells = ["2024-05-01 12:00:00", "respondent@example.com", "consent"]
    for item in ITEM_NAMES:
        cells.extend(overrides.get(item, default))
    return cells


def make_csv(rows):
    header = ["Timestamp", "Email", "Consent"]
    for item in ITEM_NAMES:
        header.extend([f"{item} throw", f"{item} expected", f"{item} desired"])
    lines = [",".join(header)]
    for cells in rows:
        lines.append(",".join(f'"{c}"' for c in cells))
    return "\n".join(lines) + "\n"
