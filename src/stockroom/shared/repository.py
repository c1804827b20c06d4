"""Query helpers shared by the custom repositories."""

from stockroom.shared.context import checkpoint

SCAN_BATCH_SIZE = 100


def scan(dao, **filters):
    """Return every record matching ``filters``, reading in fixed-size batches.

    Protean querysets apply a default limit, so aggregate reads page through
    the whole table instead of trusting a single ``all()`` call. Batches are
    ordered by id so consecutive offsets neither skip nor repeat rows.
    """
    queryset = (dao.query.filter(**filters) if filters else dao.query).order_by("id")
    records = []
    offset = 0
    while True:
        checkpoint()
        batch = queryset.offset(offset).limit(SCAN_BATCH_SIZE).all().items
        records.extend(batch)
        if len(batch) < SCAN_BATCH_SIZE:
            return records
        offset += SCAN_BATCH_SIZE


def newest_first(records, count=None):
    """Order by ``created_at`` descending, breaking ties by ascending id."""
    ordered = sorted(records, key=lambda record: str(record.id))
    ordered.sort(key=lambda record: record.created_at, reverse=True)
    return ordered if count is None else ordered[:count]


def paginate(records, page, page_size):
    start = (page - 1) * page_size
    return records[start : start + page_size]
