"""Upload reference model."""

from .sys import Link, Resource


class UploadReference(Resource):
    """A raw file stored on the upload host, not yet bound to an asset."""

    def as_link(self) -> Link:
        """Return a link suitable for an asset file's ``uploadFrom``.

        The link only keeps the upload id; creation metadata and the space
        back-reference are dropped, and the link type is set to ``Upload``.
        """
        if not self.sys.id:
            raise ValueError("The upload reference has no id.")
        return Link.to("Upload", self.sys.id)
