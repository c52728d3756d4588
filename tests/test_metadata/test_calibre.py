# tests/test_metadata/test_calibre.py
import subprocess
import pytest
from datetime import date
from unittest.mock import Mock, patch
from librarian.config import CalibreConfig
from librarian.errors import ProviderLookupFailed
from librarian.metadata.calibre import fetch_metadata, parse_opf

SAMPLE_OPF = """<?xml version='1.0' encoding='utf-8'?>
<package xmlns="http://www.idpf.org/2007/opf" unique-identifier="uuid_id" version="2.0">
    <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
        <dc:identifier opf:scheme="calibre" id="calibre_id">1</dc:identifier>
        <dc:identifier opf:scheme="ISBN">9780140449136</dc:identifier>
        <dc:identifier opf:scheme="GOOGLE">VSZ8DwAAQBAJ</dc:identifier>
        <dc:identifier opf:scheme="AMAZON">0140449132</dc:identifier>
        <dc:title>The Odyssey</dc:title>
        <dc:creator opf:file-as="Homer" opf:role="aut">Homer</dc:creator>
        <dc:creator opf:role="trl">Robert Fagles</dc:creator>
        <dc:date>2003-04-29T00:00:00+00:00</dc:date>
        <dc:description>Odysseus goes home.</dc:description>
        <dc:publisher>Penguin</dc:publisher>
        <dc:language>eng</dc:language>
        <dc:subject>Epic</dc:subject>
        <dc:subject>Poetry</dc:subject>
    </metadata>
</package>
"""

@pytest.fixture
def config():
    return CalibreConfig(fetcher="fetch-ebook-metadata", timeout=5)

def test_parse_opf():
    details = parse_opf(SAMPLE_OPF)

    assert details.isbn == "9780140449136"
    assert details.title == "The Odyssey"
    # Only creators with the author role
    assert details.authors == ["Homer"]
    assert details.tags == ["Epic", "Poetry"]
    assert details.summary == "Odysseus goes home."
    assert details.published == date(2003, 4, 29)
    assert details.publisher == "Penguin"
    assert details.language == "eng"
    assert details.google_id == "VSZ8DwAAQBAJ"
    assert details.amazon_id == "0140449132"
    assert details.cover is None

def test_parse_opf_undefined_date():
    """Test that Calibre's placeholder date is treated as unknown"""
    document = SAMPLE_OPF.replace("2003-04-29T00:00:00+00:00", "0101-01-01T00:00:00+00:00")
    assert parse_opf(document).published is None

def test_parse_opf_invalid_date():
    document = SAMPLE_OPF.replace("2003-04-29T00:00:00+00:00", "sometime")
    with pytest.raises(ProviderLookupFailed):
        parse_opf(document)

def test_parse_without_metadata():
    assert parse_opf("") is None
    assert parse_opf("<package></package>") is None

def test_fetch_metadata_runs_fetcher(config):
    with patch("librarian.metadata.calibre.subprocess.run") as mock_run:
        mock_run.return_value = Mock(returncode=0, stdout=SAMPLE_OPF.encode(), stderr=b"")
        details = fetch_metadata(config, "9780140449136")

    args = mock_run.call_args.args[0]
    assert args[:5] == ["fetch-ebook-metadata", "--isbn", "9780140449136", "--opf", "--cover"]
    assert mock_run.call_args.kwargs["timeout"] == 5
    assert details.title == "The Odyssey"

def test_fetch_metadata_reads_cover(config):
    def run(args, **kwargs):
        with open(args[-1], "wb") as f:
            f.write(b"jpeg data")
        return Mock(returncode=0, stdout=SAMPLE_OPF.encode(), stderr=b"")

    with patch("librarian.metadata.calibre.subprocess.run", side_effect=run):
        details = fetch_metadata(config, "9780140449136")

    assert details.cover == b"jpeg data"

def test_fetch_metadata_non_zero_exit(config):
    with patch("librarian.metadata.calibre.subprocess.run") as mock_run:
        mock_run.return_value = Mock(returncode=1, stdout=b"", stderr=b"No results found")
        with pytest.raises(ProviderLookupFailed) as excinfo:
            fetch_metadata(config, "9780140449136")

    assert excinfo.value.provider == "calibre"

def test_fetch_metadata_timeout(config):
    with patch("librarian.metadata.calibre.subprocess.run",
               side_effect=subprocess.TimeoutExpired("fetch-ebook-metadata", 5)):
        with pytest.raises(ProviderLookupFailed, match="timed out"):
            fetch_metadata(config, "9780140449136")

def test_fetch_metadata_missing_fetcher(config):
    with patch("librarian.metadata.calibre.subprocess.run", side_effect=FileNotFoundError()):
        with pytest.raises(ProviderLookupFailed):
            fetch_metadata(config, "9780140449136")
