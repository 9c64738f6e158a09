from .exceptions import InvariantViolation


def assert_section_order(sections):
    orders = [section.order for section in sections]
    expected = list(range(len(orders)))

    if sorted(orders) != expected:
        raise InvariantViolation(
            f"Section orders are not consecutive starting from 0: {orders}"
        )


def assert_section_ids(sections):
    ids = [section.id for section in sections]
    if len(ids) != len(set(ids)):
        raise InvariantViolation(f"Section ids must be unique within a page: {ids}")
