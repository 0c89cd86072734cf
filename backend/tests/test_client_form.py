"""
Tests for the add/edit movie form state and submit flow.
"""
import pytest

from cinelog.client.api import ApiError
from cinelog.client.form import MovieForm
from cinelog.schemas.movie import MovieResponse


class StubApi:
    """In-memory stand-in for MovieApiClient"""

    def __init__(self):
        self.calls = []
        self.upload_error = None
        self.save_error = None

    def upload_image(self, filename, content, content_type=None):
        self.calls.append(("upload", filename))
        if self.upload_error:
            raise self.upload_error
        return f"https://res.cloudinary.com/demo/movies/{filename}"

    def create_movie(self, movie_data):
        self.calls.append(("create", movie_data))
        if self.save_error:
            raise self.save_error
        return MovieResponse.model_validate(dict(movie_data, id=1))

    def update_movie(self, movie_id, movie_data):
        self.calls.append(("update", movie_id, movie_data))
        if self.save_error:
            raise self.save_error
        return MovieResponse.model_validate(dict(movie_data, id=movie_id))


@pytest.fixture
def api():
    return StubApi()


@pytest.fixture
def alerts():
    return []


@pytest.fixture
def existing_movie():
    return MovieResponse.model_validate({
        "id": 7,
        "title": "Arrival",
        "type": "Movie",
        "director": "Denis Villeneuve",
        "budget": "$47M",
        "location": "Montreal",
        "duration": "116 min",
        "yearTime": "2016",
        "imageUrl": "https://res.cloudinary.com/demo/movies/arrival.jpg",
    })


def fill(form, **values):
    defaults = {
        "title": "Dune",
        "type": "Movie",
        "director": "Denis Villeneuve",
        "budget": "$165M",
        "location": "Jordan",
        "duration": "155 min",
        "year_time": "2021",
    }
    defaults.update(values)
    for field, value in defaults.items():
        form.set_field(field, value)


class TestValidation:

    def test_empty_form_reports_every_field(self, api):
        form = MovieForm(api)

        assert form.submit() is False
        assert form.errors == {
            "title": "Title is required",
            "type": "Type is required",
            "director": "Director is required",
            "budget": "Budget is required",
            "location": "Location is required",
            "duration": "Duration is required",
            "year_time": "Year/Time is required",
        }
        assert api.calls == []

    def test_single_blank_field_blocks_submit(self, api):
        form = MovieForm(api)
        fill(form, budget=" ")

        assert form.submit() is False
        assert form.errors == {"budget": "Budget is required"}
        assert api.calls == []

    def test_unknown_field_is_rejected(self, api):
        with pytest.raises(KeyError):
            MovieForm(api).set_field("rating", "10")


class TestAddMode:

    def test_submit_without_image_skips_upload(self, api):
        done = []
        form = MovieForm(api, on_success=lambda: done.append(True))
        fill(form)

        assert form.submit() is True

        assert [call[0] for call in api.calls] == ["create"]
        payload = api.calls[0][1]
        assert payload["title"] == "Dune"
        assert payload["yearTime"] == "2021"
        assert payload["imageUrl"] is None
        assert done == [True]
        assert form.values["title"] == ""

    def test_selected_image_is_previewed_then_uploaded(self, api):
        form = MovieForm(api)
        fill(form)

        form.select_image("dune.jpg", b"\xff\xd8jpeg")

        assert form.image_preview.startswith("data:image/jpeg;base64,")
        assert api.calls == []

        assert form.submit() is True
        assert api.calls[0] == ("upload", "dune.jpg")
        assert api.calls[1][1]["imageUrl"] == "https://res.cloudinary.com/demo/movies/dune.jpg"

    def test_failed_upload_aborts_and_keeps_data(self, api, alerts):
        api.upload_error = ApiError(
            "Failed to upload image", status_code=500,
            payload={"error": "Failed to upload image", "details": "quota"},
        )
        form = MovieForm(api, alert=alerts.append)
        fill(form)
        form.select_image("dune.jpg", b"jpeg")

        assert form.submit() is False

        assert alerts == ["Failed to upload image: Failed to upload image"]
        assert [call[0] for call in api.calls] == ["upload"]
        assert form.values["title"] == "Dune"
        assert form.selected_image is not None
        assert form.is_uploading is False
        assert form.is_submitting is False

    def test_failed_create_alerts_and_keeps_data(self, api, alerts):
        api.save_error = ApiError("Failed to create movie", status_code=500)
        done = []
        form = MovieForm(api, alert=alerts.append, on_success=lambda: done.append(True))
        fill(form)

        assert form.submit() is False

        assert alerts == ["Failed to add movie. Please try again."]
        assert done == []
        assert form.values["director"] == "Denis Villeneuve"

    def test_cancel_empty_form_needs_no_confirmation(self, api):
        prompts, closed = [], []
        form = MovieForm(api, confirm=lambda msg: prompts.append(msg) or False,
                         on_cancel=lambda: closed.append(True))

        assert form.cancel() is True
        assert prompts == []
        assert closed == [True]

    def test_cancel_with_data_asks_first(self, api):
        prompts, closed = [], []
        form = MovieForm(api, confirm=lambda msg: prompts.append(msg) or False,
                         on_cancel=lambda: closed.append(True))
        form.set_field("title", "Dune")

        assert form.cancel() is False
        assert prompts == ["You have unsaved changes. Are you sure you want to cancel?"]
        assert closed == []
        assert form.values["title"] == "Dune"

    def test_submit_labels(self, api):
        form = MovieForm(api)
        assert form.submit_label == "Add Movie"
        form.is_submitting = True
        assert form.submit_label == "Adding..."
        form.is_uploading = True
        assert form.submit_label == "Uploading image..."


class TestEditMode:

    def test_prepopulated_from_movie(self, api, existing_movie):
        form = MovieForm(api, mode="edit", movie=existing_movie)

        assert form.values["title"] == "Arrival"
        assert form.values["year_time"] == "2016"
        assert form.image_preview == existing_movie.image_url
        assert form.submit_label == "Update Movie"

    def test_update_keeps_existing_image(self, api, existing_movie):
        form = MovieForm(api, mode="edit", movie=existing_movie)
        form.set_field("duration", "118 min")

        assert form.submit() is True

        kind, movie_id, payload = api.calls[0]
        assert kind == "update"
        assert movie_id == 7
        assert payload["duration"] == "118 min"
        assert payload["imageUrl"] == existing_movie.image_url

    def test_new_image_replaces_poster(self, api, existing_movie):
        form = MovieForm(api, mode="edit", movie=existing_movie)
        form.select_image("arrival-new.png", b"\x89PNG", "image/png")

        assert form.image_preview.startswith("data:image/png;base64,")
        assert form.submit() is True

        assert api.calls[0] == ("upload", "arrival-new.png")
        kind, movie_id, payload = api.calls[1]
        assert kind == "update"
        assert movie_id == 7
        assert payload["imageUrl"] == "https://res.cloudinary.com/demo/movies/arrival-new.png"

    def test_failed_upload_in_edit_mode_skips_update(self, api, alerts, existing_movie):
        api.upload_error = ApiError("Request failed: connection refused")
        done = []
        form = MovieForm(api, mode="edit", movie=existing_movie, alert=alerts.append,
                         on_success=lambda: done.append(True))
        form.set_field("title", "Arrival (2016)")
        form.select_image("arrival-new.png", b"\x89PNG", "image/png")

        assert form.submit() is False

        assert alerts == ["Failed to upload image: Request failed: connection refused"]
        assert [call[0] for call in api.calls] == ["upload"]
        assert done == []
        assert form.values["title"] == "Arrival (2016)"

    def test_failed_update_alerts(self, api, alerts, existing_movie):
        api.save_error = ApiError("Failed to update movie", status_code=500)
        form = MovieForm(api, mode="edit", movie=existing_movie, alert=alerts.append)

        assert form.submit() is False
        assert alerts == ["Failed to update movie. Please try again."]

    def test_cancel_always_confirms(self, api, existing_movie):
        prompts = []
        form = MovieForm(api, mode="edit", movie=existing_movie,
                         confirm=lambda msg: prompts.append(msg) or True)

        assert form.cancel() is True
        assert prompts == ["Are you sure you want to cancel editing? Any changes will be lost."]

    def test_unknown_mode(self, api):
        with pytest.raises(ValueError):
            MovieForm(api, mode="view")
