class DataNotFoundError(Exception):
    pass


class PermissionDenied(Exception):
    pass


class ArtifactValidationError(ValueError):
    def __init__(self, detail: str, errors: list = None):
        super().__init__(detail)
        self.detail = detail
        self.errors = errors or []


class StoreError(Exception):
    pass


class ArtifactToolError(Exception):
    pass
