def normalize_media(asset):
    return {
        "id": asset.id,
        "page_id": asset.page_id,
        "file_name": asset.file_name,
        "file_path": asset.file_path,
        "file_type": asset.file_type,
        "file_size": asset.file_size,
        "public_url": asset.public_url,
        "created_at": asset.created_at.isoformat() if asset.created_at else None,
    }


def normalize_orphan(orphan):
    return {
        "id": orphan.id,
        "asset_id": orphan.asset_id,
        "page_id": orphan.page_id,
        "file_path": orphan.file_path,
        "reason": orphan.reason,
        "detail": orphan.detail,
        "created_at": orphan.created_at.isoformat() if orphan.created_at else None,
    }
