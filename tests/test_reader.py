import io

import pytest

from tmxkit.reader import (
    CallableResourceReader,
    FilesystemResourceReader,
    ResourceReader,
)


def test_filesystem_reads_file(tmp_path):
    path = tmp_path / "map.tmx"
    path.write_bytes(b"<map/>")
    with FilesystemResourceReader().read_from(path) as stream:
        assert stream.read() == b"<map/>"


def test_filesystem_reads_str_path(tmp_path):
    path = tmp_path / "tiles.tsx"
    path.write_bytes(b"<tileset/>")
    with FilesystemResourceReader().read_from(str(path)) as stream:
        assert stream.read() == b"<tileset/>"


def test_filesystem_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        FilesystemResourceReader().read_from(tmp_path / "absent.tmx")


def test_filesystem_reader_is_reusable(tmp_path):
    first = tmp_path / "a.tmx"
    second = tmp_path / "b.tsx"
    first.write_bytes(b"<map/>")
    second.write_bytes(b"<tileset/>")
    reader = FilesystemResourceReader()
    with reader.read_from(first) as stream:
        assert stream.read() == b"<map/>"
    with reader.read_from(second) as stream:
        assert stream.read() == b"<tileset/>"


def test_callable_reader_passes_path():
    seen = []

    def load(path):
        seen.append(path)
        return io.BytesIO(b"data")

    reader = CallableResourceReader(load)
    assert reader.read_from("my_map.tmx").read() == b"data"
    assert seen == ["my_map.tmx"]


def test_callable_reader_propagates_error():
    def load(path):
        raise FileNotFoundError(path)

    with pytest.raises(FileNotFoundError):
        CallableResourceReader(load).read_from("missing.tmx")


def test_abstract_reader_cannot_be_created():
    with pytest.raises(TypeError):
        ResourceReader()


def test_callable_reader_over_memory_resources():
    resources = {"my_map.tmx": b"<map/>"}

    def load(path):
        try:
            return io.BytesIO(resources[path])
        except KeyError:
            raise FileNotFoundError(path) from None

    reader = CallableResourceReader(load)
    assert reader.read_from("my_map.tmx").read() == b"<map/>"
    with pytest.raises(FileNotFoundError):
        reader.read_from("other.tmx")