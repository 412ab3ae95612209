class ECSMetadataError(Exception):
    pass


class MetadataRequestError(ECSMetadataError):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MetadataParseError(ECSMetadataError):
    pass


class ConfigurationError(ECSMetadataError):
    pass
