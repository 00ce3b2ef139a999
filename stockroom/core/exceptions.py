"""
Typed failures raised by the services.
The API layer maps each one to an HTTP status via status_code.
"""

class StockroomError(Exception):
    """Base error for store and ledger operations"""
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

class NotFound(StockroomError):
    """No record with the requested id"""
    status_code = 404

class ValidationFailure(StockroomError):
    """Input rejected before anything was persisted"""
    status_code = 422

class ReferencedByOthers(StockroomError):
    """Delete blocked because other records still point at this one"""
    status_code = 409

class StorageFailure(StockroomError):
    """The database refused or failed the write"""
    status_code = 503
