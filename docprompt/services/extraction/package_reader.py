"""Reader for ZIP-packaged XML documents (.docx, .pptx).

Office Open XML files are ZIP archives whose members are XML parts, e.g.
``word/document.xml`` or ``ppt/slides/slide1.xml``.  PackageReader opens the
archive once, selects members with a caller-supplied predicate, and returns
their bytes together with the member path.

Members come back in archive order.  That order is stable for a given file
but carries no meaning, so callers that need slide order re-sort using data
parsed from ``member_path``.
"""

from __future__ import annotations

import zipfile
import zlib
from collections.abc import Callable
from pathlib import Path

import structlog

from docprompt.models.document import PackageMember
from docprompt.utils.errors import ContainerEmptyError, ContainerReadError

logger = structlog.get_logger(logger_name=__name__)

MemberPredicate = Callable[[str], bool]


class PackageReader:
    """Opens a packaged XML container and reads selected members."""

    def read_members(
        self,
        path: str | Path,
        predicate: MemberPredicate,
        description: str = "",
    ) -> list[PackageMember]:
        """Return every member whose path satisfies ``predicate``.

        Parameters
        ----------
        path:
            Filesystem path of the container.
        predicate:
            Called with each member path; members returning ``True`` are read.
        description:
            Human-readable name of what was being looked for, used in the
            :class:`ContainerEmptyError` message.

        Returns
        -------
        list[PackageMember]
            Matching members in archive order, ``ordinal_hint`` unset.

        Raises
        ------
        ContainerReadError
            If the file is not a valid ZIP archive or a member cannot be read.
        ContainerEmptyError
            If no member matches.
        """
        try:
            with zipfile.ZipFile(path) as archive:
                members = [
                    PackageMember(member_path=info.filename, data=archive.read(info))
                    for info in archive.infolist()
                    if not info.is_dir() and predicate(info.filename)
                ]
        except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, OSError, RuntimeError) as exc:
            # RuntimeError: encrypted members; OSError covers truncated reads.
            logger.error("container_open_failed", path=str(path), error=str(exc))
            raise ContainerReadError(path, exc) from exc

        if not members:
            logger.warning("container_no_matching_members", path=str(path), wanted=description)
            raise ContainerEmptyError(path, description)

        logger.debug("container_members_read", path=str(path), count=len(members))
        return members

    def read_member(self, path: str | Path, member_path: str) -> PackageMember:
        """Read one required member by exact path."""
        return self.read_members(
            path,
            lambda name: name == member_path,
            description=member_path,
        )[0]
