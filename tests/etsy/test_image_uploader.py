"""Tests for listing_refresh/etsy/image_uploader.py"""

from unittest.mock import patch

import pytest

from conftest import make_response, write_template
from listing_refresh.errors import RemoteApiError, TemplateSchemaError
from listing_refresh.etsy.image_uploader import (
    ListingImageUploader,
    image_sort_key,
    list_mockup_images,
)


def make_folder(root, name, files):
    folder = root / name
    folder.mkdir(parents=True)
    for filename in files:
        (folder / filename).write_bytes(filename.encode())
    return folder


@pytest.fixture
def images_root(tmp_path):
    root = tmp_path / "listing_images"
    root.mkdir()
    return root


class TestImageOrder:
    def test_numeric_not_lexicographic(self):
        names = ["2.png", "10.jpg", "a.png", "1.jpg"]
        assert sorted(names, key=image_sort_key) == ["1.jpg", "2.png", "10.jpg", "a.png"]

    def test_unnumbered_sorted_by_name(self):
        names = ["zeta.jpg", "alpha.jpg", "3.jpg"]
        assert sorted(names, key=image_sort_key) == ["3.jpg", "alpha.jpg", "zeta.jpg"]

    def test_non_image_files_ignored(self, images_root):
        make_folder(images_root, "mug", ["1.jpg", "notes.txt", "2.png", "3.gif"])
        assert list_mockup_images(images_root / "mug") == ["1.jpg", "2.png"]


class TestUploadRows:
    def test_ranks_follow_file_order_and_cap(self, mock_client, app_session, template_row, images_root):
        make_folder(images_root, "mug", [f"{i}.jpg" for i in range(1, 13)])
        rows = [template_row({"Product ID": "101", "Mockups Folder": "mug"})]

        uploader = ListingImageUploader(mock_client, app_session, images_dir=images_root)
        report = uploader.upload_rows(rows)

        assert report.ok
        calls = mock_client.upload_listing_image.call_args_list
        assert len(calls) == 10
        assert [c.args[3] for c in calls] == [f"{i}.jpg" for i in range(1, 11)]
        assert [c.args[4] for c in calls] == list(range(1, 11))
        assert all(c.kwargs["overwrite"] is True for c in calls)
        assert calls[0].args[:3] == ("55555", "101", b"1.jpg")

    def test_missing_folder_blocks_every_upload(self, mock_client, app_session, template_row, images_root):
        make_folder(images_root, "a", ["1.jpg"])
        make_folder(images_root, "b", ["1.jpg"])
        rows = [
            template_row({"Product ID": "1", "Mockups Folder": "a"}),
            template_row({"Product ID": "2", "Mockups Folder": "missing"}),
            template_row({"Product ID": "3", "Mockups Folder": "b"}),
        ]

        report = ListingImageUploader(mock_client, app_session, images_dir=images_root).upload_rows(rows)

        mock_client.upload_listing_image.assert_not_called()
        assert report.blocked
        assert not report.ok
        assert len(report.failures) == 1
        assert report.failures[0].row == 3
        assert "missing" in report.failures[0].message

    def test_row_failure_isolated(self, mock_client, app_session, template_row, images_root):
        make_folder(images_root, "a", ["1.jpg", "2.jpg"])
        make_folder(images_root, "b", ["1.jpg"])
        make_folder(images_root, "c", ["1.jpg"])
        rows = [
            template_row({"Product ID": "1", "Mockups Folder": "a"}),
            template_row({"Product ID": "2", "Mockups Folder": "b"}),
            template_row({"Product ID": "3", "Mockups Folder": "c"}),
        ]

        def fake_upload(shop_id, listing_id, image_bytes, filename, rank, overwrite=True):
            if listing_id == "2":
                raise RemoteApiError(400, {"error": "bad image"}, message="bad image")
            return {"rank": rank}

        mock_client.upload_listing_image.side_effect = fake_upload

        report = ListingImageUploader(mock_client, app_session, images_dir=images_root).upload_rows(rows)

        assert mock_client.upload_listing_image.call_count == 4
        assert [o.row for o in report.successes] == [2, 4]
        assert [o.row for o in report.failures] == [3]
        assert report.failures[0].message == "There was a problem uploading the images for this row"

    def test_failure_stops_rest_of_row(self, mock_client, app_session, template_row, images_root):
        make_folder(images_root, "a", ["1.jpg", "2.jpg", "3.jpg"])
        mock_client.upload_listing_image.side_effect = [{}, RemoteApiError(500, "err"), {}]
        rows = [template_row({"Product ID": "1", "Mockups Folder": "a"})]

        report = ListingImageUploader(mock_client, app_session, images_dir=images_root).upload_rows(rows)

        assert mock_client.upload_listing_image.call_count == 2
        assert len(report.failures) == 1

    def test_row_without_folder_skipped(self, mock_client, app_session, template_row, images_root):
        make_folder(images_root, "a", ["1.jpg"])
        rows = [
            template_row({"Product ID": "1", "Mockups Folder": ""}),
            template_row({"Product ID": "2", "Mockups Folder": "a"}),
        ]

        report = ListingImageUploader(mock_client, app_session, images_dir=images_root).upload_rows(rows)

        assert report.counts() == {"success": 1, "skipped": 1, "failed": 0}
        assert report.skips[0].row == 2
        assert mock_client.upload_listing_image.call_count == 1

    def test_empty_folder_is_success_with_no_uploads(self, mock_client, app_session, template_row, images_root):
        make_folder(images_root, "empty", [])
        rows = [template_row({"Product ID": "1", "Mockups Folder": "empty"})]

        report = ListingImageUploader(mock_client, app_session, images_dir=images_root).upload_rows(rows)

        assert report.ok
        mock_client.upload_listing_image.assert_not_called()


class TestUploadFromCsv:
    def test_reads_template(self, mock_client, app_session, template_row, images_root, tmp_path):
        make_folder(images_root, "mug", ["2.png", "1.jpg"])
        path = write_template(tmp_path / "t.csv", [
            template_row({"Product ID": "9", "Mockups Folder": "mug"}),
        ])

        report = ListingImageUploader(mock_client, app_session, images_dir=images_root).upload_from_csv(path)

        assert report.ok
        names = [c.args[3] for c in mock_client.upload_listing_image.call_args_list]
        assert names == ["1.jpg", "2.png"]

    def test_missing_column_raises(self, mock_client, app_session, tmp_path, images_root):
        path = write_template(tmp_path / "t.csv", [{"Product ID": "1"}], fieldnames=["Product ID"])

        with pytest.raises(TemplateSchemaError):
            ListingImageUploader(mock_client, app_session, images_dir=images_root).upload_from_csv(path)


class TestUploadWithClient:
    def test_non_json_upload_response_keeps_rows_independent(self, client, app_session, template_row, images_root):
        make_folder(images_root, "a", ["1.jpg"])
        make_folder(images_root, "b", ["1.jpg", "2.jpg"])
        created = make_response(201)
        created.json.side_effect = ValueError("no json")
        rows = [
            template_row({"Product ID": "1", "Mockups Folder": "a"}),
            template_row({"Product ID": "2", "Mockups Folder": "b"}),
        ]

        with patch.object(client.session, "request", return_value=created) as mock_request:
            report = ListingImageUploader(client, app_session, images_dir=images_root).upload_rows(rows)

        assert mock_request.call_count == 3
        assert [o.row for o in report.successes] == [2, 3]
        assert report.ok
