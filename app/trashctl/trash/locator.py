"""Trash directory discovery.

Finds the user's home trash and the top-directory trash of every
mounted filesystem, following the freedesktop.org Trash specification:

- ``$topdir/.Trash/$uid`` is used only when ``$topdir/.Trash`` is a real
  directory (not a symlink) with the sticky bit set.
- ``$topdir/.Trash-$uid`` is used only when it is a real directory owned
  by the current user.

Unusable candidates are skipped and recorded, never fatal.
"""

import logging
import os
import stat
from pathlib import Path

import psutil

from trashctl.core.paths import get_home_trash_dir
from trashctl.trash.errors import DiscoveryError
from trashctl.trash.models import TrashLocation

logger = logging.getLogger(__name__)

# Kernel and virtual filesystems that never hold user trash
_PSEUDO_FSTYPES: frozenset[str] = frozenset(
    {
        "autofs",
        "binfmt_misc",
        "bpf",
        "cgroup",
        "cgroup2",
        "configfs",
        "debugfs",
        "devpts",
        "devtmpfs",
        "efivarfs",
        "fusectl",
        "hugetlbfs",
        "mqueue",
        "nsfs",
        "overlay",
        "proc",
        "pstore",
        "ramfs",
        "rpc_pipefs",
        "securityfs",
        "squashfs",
        "sysfs",
        "tracefs",
    }
)


class TrashLocator:
    """Enumerates usable trash locations.

    Args:
        home_trash: Home trash directory. Defaults to $XDG_DATA_HOME/Trash.
        mount_points: Explicit mount points to inspect. Defaults to the
            system mount table read through psutil.
        uid: User id for per-user trash directories. Defaults to the
            current process uid.
    """

    def __init__(
        self,
        *,
        home_trash: Path | None = None,
        mount_points: tuple[Path, ...] | None = None,
        uid: int | None = None,
    ) -> None:
        self._home_trash = home_trash if home_trash is not None else get_home_trash_dir()
        self._mount_points = mount_points
        self._uid = uid if uid is not None else os.getuid()
        self.skipped: list[tuple[Path, str]] = []

    @property
    def home_location(self) -> TrashLocation:
        """The home trash location (may not exist on disk yet)."""
        return TrashLocation(root=self._home_trash, device=_device_of(self._home_trash))

    def discover(self) -> list[TrashLocation]:
        """Discover all trash locations.

        The home trash is always first. Every other mount point contributes
        its existing, usable top-directory trash directories, at most once
        per device.

        Returns:
            List of trash locations.

        Raises:
            DiscoveryError: If the mount table cannot be read.
        """
        self.skipped = []
        home = self.home_location
        locations = [home]
        seen_devices: set[int] = set()
        if home.device is not None:
            seen_devices.add(home.device)

        for mount_point in self._get_mount_points():
            try:
                device = os.stat(mount_point).st_dev
            except OSError as e:
                logger.debug("Cannot stat mount point %s: %s", mount_point, e)
                continue

            if device in seen_devices:
                continue
            seen_devices.add(device)

            locations.extend(self._topdir_locations(mount_point, device))

        logger.debug("Discovered %d trash location(s)", len(locations))
        return locations

    def location_for(self, path: Path) -> TrashLocation:
        """Return the trash location that should receive ``path``.

        Paths on the home trash device go to the home trash. Anything else
        goes to the top-directory trash of its mount point. Directories are
        not created here.

        Args:
            path: Path about to be trashed.

        Returns:
            Target trash location.

        Raises:
            OSError: If the path cannot be inspected.
        """
        device = os.lstat(path).st_dev
        home = self.home_location
        if home.device == device:
            return home

        topdir = _find_mount_point(path)
        shared = topdir / ".Trash"
        if self._shared_trash_is_valid(shared):
            return TrashLocation(root=shared / str(self._uid), device=device, topdir=topdir)
        return TrashLocation(root=topdir / f".Trash-{self._uid}", device=device, topdir=topdir)

    def _get_mount_points(self) -> tuple[Path, ...]:
        """Read mount points from the system mount table.

        Raises:
            DiscoveryError: If psutil cannot read the mount table.
        """
        if self._mount_points is not None:
            return self._mount_points

        try:
            partitions = psutil.disk_partitions(all=True)
        except (OSError, psutil.Error) as e:
            raise DiscoveryError(f"Cannot read mount table: {e}") from e

        return tuple(
            Path(p.mountpoint) for p in partitions if p.fstype not in _PSEUDO_FSTYPES
        )

    def _topdir_locations(self, topdir: Path, device: int) -> list[TrashLocation]:
        """Collect usable trash directories under one mount point."""
        found: list[TrashLocation] = []

        shared = topdir / ".Trash"
        if os.path.lexists(shared):
            if self._shared_trash_is_valid(shared):
                user_dir = shared / str(self._uid)
                if user_dir.is_dir() and not user_dir.is_symlink():
                    self._append_if_usable(found, user_dir, device, topdir)
            else:
                self._skip(shared, "not a sticky directory or is a symlink")

        private = topdir / f".Trash-{self._uid}"
        if private.is_symlink():
            self._skip(private, "is a symlink")
        elif private.is_dir():
            try:
                owner = private.stat().st_uid
            except OSError as e:
                self._skip(private, str(e))
            else:
                if owner != self._uid:
                    self._skip(private, f"owned by uid {owner}")
                else:
                    self._append_if_usable(found, private, device, topdir)

        return found

    def _append_if_usable(
        self,
        found: list[TrashLocation],
        root: Path,
        device: int,
        topdir: Path,
    ) -> None:
        if os.access(root, os.R_OK | os.W_OK | os.X_OK):
            found.append(TrashLocation(root=root, device=device, topdir=topdir))
        else:
            self._skip(root, "permission denied")

    @staticmethod
    def _shared_trash_is_valid(shared: Path) -> bool:
        """Check the sticky-bit and no-symlink requirements for $topdir/.Trash."""
        try:
            st = os.lstat(shared)
        except OSError:
            return False
        return stat.S_ISDIR(st.st_mode) and bool(st.st_mode & stat.S_ISVTX)

    def _skip(self, path: Path, reason: str) -> None:
        logger.debug("Skipping trash directory %s: %s", path, reason)
        self.skipped.append((path, reason))


def _device_of(path: Path) -> int | None:
    """Return st_dev of path or of its nearest existing ancestor."""
    for candidate in (path, *path.parents):
        try:
            return os.stat(candidate).st_dev
        except OSError:
            continue
    return None


def _find_mount_point(path: Path) -> Path:
    """Walk up from path to the mount point of its filesystem."""
    current = Path(os.path.abspath(path)).parent
    while not os.path.ismount(current):
        if current.parent == current:
            break
        current = current.parent
    return current
