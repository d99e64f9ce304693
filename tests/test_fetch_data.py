from typing import Dict, Optional, get_type_hints
from unittest.mock import MagicMock, patch

import requests

from fetch_data import download_file, main


def ok_response(content=b"data"):
    response = MagicMock()
    response.content = content
    response.raise_for_status = MagicMock()
    return response


def test_download_file_writes_content(tmp_path):
    output = tmp_path / "nested" / "us-counties.csv"
    with patch("requests.get", return_value=ok_response(b"date,fips\n")):
        assert download_file("https://example.com/us-counties.csv", str(output), delay=0)
    assert output.read_bytes() == b"date,fips\n"


def test_download_file_retries_then_succeeds(tmp_path):
    output = tmp_path / "us.json"
    with patch("requests.get", side_effect=[requests.ConnectionError("boom"), ok_response()]) as mock_get, \
         patch("time.sleep") as mock_sleep:
        assert download_file("https://example.com/us.json", str(output), attempts=3, delay=1)
    assert mock_get.call_count == 2
    mock_sleep.assert_called_once_with(1)


def test_download_file_gives_up(tmp_path):
    with patch("requests.get", side_effect=requests.ConnectionError("boom")) as mock_get, \
         patch("time.sleep"):
        assert not download_file("https://example.com/us.json", str(tmp_path / "us.json"), attempts=3, delay=0)
    assert mock_get.call_count == 3


def test_main_reports_failure(tmp_path):
    downloads = {str(tmp_path / "a.json"): "https://example.com/a.json", str(tmp_path / "b.csv"): "https://example.com/b.csv"}
    with patch("fetch_data.download_file", side_effect=[True, False]):
        assert main(downloads) == 1


def test_main_success(tmp_path):
    downloads = {str(tmp_path / "a.json"): "https://example.com/a.json"}
    with patch("fetch_data.download_file", return_value=True):
        assert main(downloads) == 0


def test_main_downloads_map_paths_to_urls():
    hints = get_type_hints(main)
    assert hints["downloads"] == Optional[Dict[str, str]]
    assert hints["return"] is int
