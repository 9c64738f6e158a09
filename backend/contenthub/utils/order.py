from dataclasses import replace


def compact_order(items, order_field="order"):
    """
    Re-assigns sequential order values (0..N-1) to an ordered collection.

    Returns new objects; the input sequence is left untouched.
    """
    return [
        replace(item, **{order_field: index})
        for index, item in enumerate(items)
    ]
