"""Read expression lines from text files and archives."""
from pathlib import Path
import tarfile
import tempfile
from typing import Callable, Iterable, List
import zipfile

import py7zr
from pydantic import BaseModel, ConfigDict, FilePath


class ExpressionLoader(BaseModel):
    """
    Loader of expression files, one expression per line.

    Supported inputs:
    - plain .txt files
    - the first .txt member of a .zip, .tar.xz or .7z archive
    """

    model_config = ConfigDict(frozen=True)

    def read_expressions(self, input_file: FilePath) -> List[str]:
        """
        Return the non-empty, stripped lines of an expression file or archive.

        :param FilePath input_file: Path to the input file or archive

        :return: Expression lines in file order
        :rtype: List[str]
        :raises ValueError: If the archive format is unsupported or contains no .txt file
        """
        input_file = Path(input_file)
        content = self._reader_for(input_file)(input_file)
        return [line.strip() for line in content.splitlines() if line.strip()]

    def _reader_for(self, input_file: Path) -> Callable[[Path], str]:
        """
        Select the reader matching the file extension.

        :param Path input_file: Path to the input file or archive

        :return: Function returning the text content of the file
        :rtype: Callable[[Path], str]
        :raises ValueError: If the format is unsupported
        """
        if input_file.suffix == ".txt":
            return lambda path: path.read_text(encoding="utf-8")
        if input_file.suffix == ".zip":
            return self._read_zip
        if input_file.suffixes[-2:] == [".tar", ".xz"]:
            return self._read_tar_xz
        if input_file.suffix == ".7z":
            return self._read_7z
        raise ValueError(f"📄❌ Unsupported archive format: {input_file.suffix}")

    @staticmethod
    def _first_text_member(names: Iterable[str], archive_kind: str) -> str:
        """
        Pick the first .txt member name of an archive.

        :raises ValueError: If the archive has no .txt member
        """
        for name in names:
            if name.endswith(".txt"):
                return name
        raise ValueError(f"📄❌ No .txt file found in {archive_kind} archive")

    def _read_zip(self, archive_path: Path) -> str:
        with zipfile.ZipFile(archive_path, "r") as zf:
            name = self._first_text_member(zf.namelist(), "zip")
            return zf.read(name).decode("utf-8")

    def _read_tar_xz(self, archive_path: Path) -> str:
        with tarfile.open(archive_path, "r:xz") as tf:
            members = {member.name: member for member in tf.getmembers() if member.isfile()}
            name = self._first_text_member(members, "tar.xz")
            # Members are read in memory, nothing is written to disk
            with tf.extractfile(members[name]) as stream:
                return stream.read().decode("utf-8")

    def _read_7z(self, archive_path: Path) -> str:
        # py7zr extracts to disk; the temporary directory is removed once read
        with tempfile.TemporaryDirectory() as tmpdir, py7zr.SevenZipFile(archive_path, mode="r") as archive:
            name = self._first_text_member(archive.getnames(), "7z")
            archive.extract(path=tmpdir, targets=[name])
            return (Path(tmpdir) / name).read_text(encoding="utf-8")
