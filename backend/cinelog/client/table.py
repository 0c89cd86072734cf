import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from cinelog.client.api import ApiError, MovieApiClient
from cinelog.client.form import ADD_MODE, EDIT_MODE, MovieForm, always_confirm, log_alert
from cinelog.client.modals import ConfirmationModal, Modal
from cinelog.schemas.movie import MovieResponse

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load movies. Make sure the backend server is running."

class TableState(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    POPULATED = "populated"

class MovieTable:
    """Movie list plus the add/edit and delete dialogs it owns"""

    def __init__(
        self,
        api: MovieApiClient,
        confirm: Callable[[str], bool] = always_confirm,
        alert: Callable[[str], None] = log_alert,
        page_size: int = 10,
    ):
        self.api = api
        self.confirm = confirm
        self.alert = alert
        self.page_size = page_size

        self.movies: List[MovieResponse] = []
        self.loading = True
        self.error: Optional[str] = None

        self.form_modal = Modal(title="Add New Movie")
        self.modal_mode = ADD_MODE
        self.editing_movie: Optional[MovieResponse] = None
        self.form: Optional[MovieForm] = None

        self.delete_modal = ConfirmationModal(
            title="Delete Movie",
            confirm_text="Delete",
            cancel_text="Cancel",
            type="danger",
        )
        self.movie_to_delete: Optional[MovieResponse] = None

    @property
    def state(self) -> TableState:
        if self.loading:
            return TableState.LOADING
        if self.error:
            return TableState.ERROR
        if not self.movies:
            return TableState.EMPTY
        return TableState.POPULATED

    @property
    def is_deleting(self) -> bool:
        return self.delete_modal.is_loading

    def load_movies(self) -> None:
        """Fetch the first page; also the "Try Again" action of the error view"""
        self.loading = True
        self.error = None
        try:
            self.movies = self.api.list_movies(skip=0, take=self.page_size)
            logger.info(f"Loaded {len(self.movies)} movies")
        except ApiError as e:
            logger.error(f"Error fetching movies: {e.message}")
            self.error = LOAD_ERROR_MESSAGE
        finally:
            self.loading = False

    @property
    def summary(self) -> str:
        count = len(self.movies)
        return f"{count} {'Movie' if count == 1 else 'Movies'}"

    @property
    def rows(self) -> List[Dict[str, Any]]:
        """Display rows; thumbnail is None where a placeholder is drawn"""
        return [
            {
                "id": movie.id,
                "thumbnail": movie.image_url,
                "title": movie.title,
                "type": movie.type,
                "director": movie.director,
                "budget": movie.budget,
                "location": movie.location,
                "duration": movie.duration,
                "yearTime": movie.year_time,
            }
            for movie in self.movies
        ]

    # Add / edit dialog

    def _open_form(self, mode: str, movie: Optional[MovieResponse]) -> MovieForm:
        self.modal_mode = mode
        self.editing_movie = movie
        self.form = MovieForm(
            self.api,
            mode=mode,
            movie=movie,
            on_success=self.handle_form_success,
            on_cancel=self.close_modal,
            confirm=self.confirm,
            alert=self.alert,
        )
        self.form_modal.open("Edit Movie" if mode == EDIT_MODE else "Add New Movie")
        return self.form

    def open_add_modal(self) -> MovieForm:
        return self._open_form(ADD_MODE, None)

    def open_edit_modal(self, movie: MovieResponse) -> MovieForm:
        return self._open_form(EDIT_MODE, movie)

    def close_modal(self) -> None:
        self.form_modal.close()
        self.form = None
        self.editing_movie = None
        self.modal_mode = ADD_MODE
        self.form_modal.title = "Add New Movie"

    def handle_form_success(self) -> None:
        self.close_modal()
        self.load_movies()

    # Delete dialog

    def request_delete(self, movie: MovieResponse) -> None:
        self.movie_to_delete = movie
        self.delete_modal.message = (
            f'Are you sure you want to delete "{movie.title}"? This action cannot be undone.'
        )
        self.delete_modal.open()

    def confirm_delete(self) -> bool:
        movie = self.movie_to_delete
        if movie is None or self.is_deleting:
            return False

        self.delete_modal.is_loading = True
        try:
            self.api.delete_movie(movie.id)
        except ApiError as e:
            logger.error(f"Error deleting movie {movie.id}: {e.message}")
            self.alert("Failed to delete movie. Please try again.")
            return False
        finally:
            self.delete_modal.is_loading = False

        self.load_movies()
        self.cancel_delete()
        return True

    def cancel_delete(self) -> None:
        self.delete_modal.close()
        self.movie_to_delete = None
