# areena/encoder.py
import logging
from pathlib import Path

import pygame
from moviepy import ImageSequenceClip

log = logging.getLogger("areena.encoder")

# Discord plays these inline without re-encoding
FFMPEG_PARAMS = ["-pix_fmt", "yuv420p", "-movflags", "+faststart"]


class EncodingError(RuntimeError):
    pass


class FrameWriter:
    """Dumps rendered frames as numbered PNGs so the encoder can read them back in tick order."""

    def __init__(self, directory):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.paths: list[Path] = []

    def __len__(self):
        return len(self.paths)

    def write(self, surface: pygame.Surface) -> Path:
        path = self.directory / f"frame_{len(self.paths):06d}.png"
        try:
            pygame.image.save(surface, str(path))
        except (pygame.error, OSError) as e:
            raise EncodingError(f"Could not write frame {path}: {e}") from e
        self.paths.append(path)
        return path


class VideoEncoder:
    def __init__(self, fps: int = 30, codec: str = "libx264", bitrate: str = "4000k"):
        self.fps = fps
        self.codec = codec
        self.bitrate = bitrate

    def encode(self, frame_paths, output_path) -> Path:
        """Compile the frames, in the given order, into one video. Removes the partial file on failure."""
        frame_paths = [str(p) for p in frame_paths]
        if not frame_paths:
            raise EncodingError("No frames to encode")
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        log.info("Creating video from %d frames...", len(frame_paths))
        clip = None
        try:
            clip = ImageSequenceClip(frame_paths, fps=self.fps)
            clip.write_videofile(
                output_path.as_posix(),
                codec=self.codec,
                bitrate=self.bitrate,
                audio=False,
                ffmpeg_params=FFMPEG_PARAMS,
                logger=None,
            )
        except Exception as e:
            # moviepy surfaces ffmpeg failures as OSError, IOError or plain Exception
            output_path.unlink(missing_ok=True)
            raise EncodingError(f"Encoding {output_path} failed: {e}") from e
        finally:
            if clip is not None:
                clip.close()
        log.info("Saved -> %s", output_path)
        return output_path
