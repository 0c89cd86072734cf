from .api import MovieApiClient, ApiError
from .form import MovieForm, ImageFile
from .modals import Modal, ConfirmationModal
from .table import MovieTable, TableState

__all__ = [
    "MovieApiClient",
    "ApiError",
    "MovieForm",
    "ImageFile",
    "Modal",
    "ConfirmationModal",
    "MovieTable",
    "TableState",
]
