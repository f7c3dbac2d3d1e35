"""Audio asset directory management.

Only placeholder assets are created here: an empty ``.mp3`` file stands in
for a recording until a real one is dropped into the directory. Existing
files are never overwritten.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cueline.config import CueLineSettings, get_logger
from cueline.exceptions import AudioAssetError, ValidationError

logger = get_logger(__name__)

AUDIO_EXTENSION = ".mp3"


@dataclass
class PlaceholderResult:
    """Outcome of ensuring one placeholder asset."""

    file: str
    path: str
    created: bool = False
    success: bool = True


def normalize_filename(filename: str) -> str:
    """Validate a bare audio filename and append ``.mp3`` when missing.

    Raises:
        ValidationError: If the name is empty or tries to leave the directory.
    """
    name = (filename or "").strip()
    if not name:
        raise ValidationError.for_field("filename", "Filename is required")
    if "/" in name or "\\" in name or name in {".", ".."} or name.startswith("."):
        raise ValidationError.for_field(
            "filename", "Filename must be a plain file name without directories"
        )
    if not name.lower().endswith(AUDIO_EXTENSION):
        name = f"{name}{AUDIO_EXTENSION}"
    return name


class AudioAssetStore:
    """Owns the audio directory that backs dialogue ``audio_path`` references."""

    def __init__(self, audio_dir: Path, url_prefix: str = "/audio") -> None:
        self.audio_dir = Path(audio_dir)
        self.url_prefix = url_prefix.rstrip("/")

    @classmethod
    def from_settings(cls, settings: CueLineSettings) -> AudioAssetStore:
        return cls(settings.audio_dir, settings.audio_url_prefix)

    def ensure_directory(self) -> None:
        """Create the audio directory if it does not exist.

        Raises:
            AudioAssetError: If the directory cannot be created.
        """
        try:
            self.audio_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AudioAssetError(
                message=f"Failed to create audio directory: {e}",
                hint="Check the audio_dir setting and directory permissions",
                details={"path": str(self.audio_dir)},
            ) from e

    def list_audio_files(self) -> list[str]:
        """Names of the ``.mp3`` files in the audio directory, sorted."""
        try:
            self.ensure_directory()
            return sorted(
                entry.name
                for entry in self.audio_dir.iterdir()
                if entry.is_file() and entry.suffix.lower() == AUDIO_EXTENSION
            )
        except (OSError, AudioAssetError) as e:
            logger.error(
                "Error reading audio directory",
                path=str(self.audio_dir),
                error=str(e),
            )
            return []

    def public_path(self, filename: str) -> str:
        """URL path under which a stored file is served."""
        return f"{self.url_prefix}/{filename}"

    def ensure_placeholder(self, filename: str) -> PlaceholderResult:
        """Make sure an asset named ``filename`` exists, creating an empty one.

        Raises:
            ValidationError: If the filename is not a plain file name.
        """
        name = normalize_filename(filename)
        result = PlaceholderResult(file=name, path=self.public_path(name))
        target = self.audio_dir / name

        try:
            self.ensure_directory()
            with target.open("xb"):
                pass
            result.created = True
            logger.info("Placeholder audio created", file=name)
        except FileExistsError:
            logger.debug("Audio file already present", file=name)
        except (OSError, AudioAssetError) as e:
            logger.error("Error creating placeholder audio", file=name, error=str(e))
            result.success = False

        return result

    def ensure_placeholders(self, filenames: list[str]) -> list[PlaceholderResult]:
        """Ensure each of ``filenames`` exists; one result per name."""
        return [self.ensure_placeholder(filename) for filename in filenames]
