from dataclasses import dataclass

UPLOAD_FOLDER = "uploads"


@dataclass(frozen=True)
class UploadedFile:
    """
    A file part of a multipart submission, already written to the
    uploads folder.

    field_name    -> form role the file was sent under (image, images, ...)
    filename      -> stored filename, unique inside the uploads folder
    original_name -> filename as sent by the client
    """

    field_name: str
    filename: str
    original_name: str

    @property
    def url(self) -> str:
        return generate_file_url(self.filename)


def generate_file_url(filename: str) -> str:
    return f"/{UPLOAD_FOLDER}/{filename}"
