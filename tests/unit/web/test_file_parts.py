"""Tests for reading multipart file parts in the products router."""

from io import BytesIO

import pytest
from starlette.datastructures import FormData, UploadFile

from boutique.errors import ValidationError
from boutique.web.routers.products import read_file_parts

MB = 1024 * 1024


def make_upload(content: bytes, filename: str = "front.png", size: int | None = None) -> UploadFile:
    return UploadFile(BytesIO(content), size=len(content) if size is None else size, filename=filename)


@pytest.mark.anyio
class TestReadFileParts:
    async def test_groups_parts_by_field(self):
        form = FormData(
            [
                ("title", "Linen dress"),
                ("image1", make_upload(b"a", "a.png")),
                ("image3", make_upload(b"c", "c.png")),
                ("image1", make_upload(b"b", "b.png")),
            ]
        )

        files = await read_file_parts(form, MB)

        assert sorted(files) == ["image1", "image3"]
        assert [part.filename for part in files["image1"]] == ["a.png", "b.png"]
        assert files["image3"][0].content == b"c"

    async def test_oversized_part_rejected_before_reading(self):
        upload = make_upload(b"tiny", size=2 * MB)

        with pytest.raises(ValidationError, match="exceeds 1 MB"):
            await read_file_parts(FormData([("image1", upload)]), MB)
        assert upload.file.tell() == 0

    async def test_missing_content_type_defaults(self):
        files = await read_file_parts(FormData([("image2", make_upload(b"x"))]), MB)
        assert files["image2"][0].content_type == "application/octet-stream"
