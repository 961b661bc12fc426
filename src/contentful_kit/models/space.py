"""Space model."""

from .sys import Resource


class Space(Resource):
    """A space, the top-level container for content."""

    name: str
