"""Travel Story - a personal travel-journal backend.

Users register and log in with email and password, then keep travel
stories (title, text, visited places, an image and the date of the visit)
that they can list, search, filter by date, edit, favourite and delete.

Quick Start:
    uvicorn travelstory.api.main:create_app --factory

    # or, with an explicit configuration
    from travelstory.api.main import create_app
    from travelstory.core.config import Settings

    app = create_app(Settings(database_url="sqlite+aiosqlite:///./travel.db"))
"""

__version__ = "0.1.0"
