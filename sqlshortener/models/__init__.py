from sqlshortener.models.url_record_model import URLRecordModel


__all__ = [
    'URLRecordModel',
]
