from contenthub.domain.section import editable_fields


def normalize_section(section, admin=False):
    data = section.to_dict()

    if admin:
        data["editable_fields"] = sorted(editable_fields(section.type))

    return data
