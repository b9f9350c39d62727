import itertools
import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from PIL import ImageFont

from asciiramp import charsets
from asciiramp.converter import AsciiConverter
from asciiramp.model import LuminanceModel, RenderMode
from asciiramp.render import DEFAULT_FONT_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderJob:
    ramp_name: str
    ramp: str
    mode: RenderMode
    luminance: LuminanceModel

    def filename(self, extension: str = "jpg") -> str:
        return f"{self.mode.value}-{self.ramp_name}-{self.luminance.value}-result.{extension}"


@dataclass
class BatchResult:
    written: list[Path] = field(default_factory=list)
    failed: list[tuple[RenderJob, Exception]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def plan_jobs(
    ramps: dict[str, str] | None = None,
    modes: list[RenderMode] | None = None,
    luminances: list[LuminanceModel] | None = None,
) -> list[RenderJob]:
    """Every combination of ramp, render mode and luminance model."""
    ramps = charsets.RAMPS if ramps is None else ramps
    modes = list(RenderMode) if modes is None else modes
    luminances = list(LuminanceModel) if luminances is None else luminances
    for ramp in ramps.values():
        charsets.check_ramp(ramp)
    return [
        RenderJob(name, ramp, mode, lum)
        for mode, lum, (name, ramp) in itertools.product(modes, luminances, ramps.items())
    ]


def _render_job(
    converter: AsciiConverter,
    job: RenderJob,
    output_dir: Path,
    font_size: int,
    font: ImageFont.FreeTypeFont | str | Path | None,
    extension: str,
) -> Path:
    path = output_dir / job.filename(extension)
    logger.debug("Generating %s", path)
    converter.render_image(job.ramp, font_size, job.mode, job.luminance, font).save(path)
    return path


def render_batch(
    converter: AsciiConverter,
    output_dir: str | Path,
    jobs: list[RenderJob] | None = None,
    font_size: int = DEFAULT_FONT_SIZE,
    font: ImageFont.FreeTypeFont | str | Path | None = None,
    extension: str = "jpg",
    max_workers: int | None = None,
) -> BatchResult:
    """Render many independent jobs of one converter concurrently.

    A failing job is logged and recorded in the result; the others still run.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    jobs = plan_jobs() if jobs is None else jobs
    if max_workers is None:
        max_workers = min(len(jobs), os.cpu_count() or 1) or 1
    if max_workers < 1:
        raise ValueError("Worker count must be >= 1")

    # Fill the pixel cache before fanning out
    rows = len(converter.pixels)

    logger.info(
        "Rendering %d image(s) of %d rows with %d worker(s) into %s", len(jobs), rows, max_workers, output_dir
    )
    result = BatchResult()
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(_render_job, converter, job, output_dir, font_size, font, extension): job for job in jobs
        }
        for future in as_completed(futures):
            job = futures[future]
            try:
                result.written.append(future.result())
            except Exception as e:
                logger.error("Failed to render %s: %s", job.filename(extension), e)
                result.failed.append((job, e))

    result.written.sort()
    logger.info("Rendered %d image(s), %d failed", len(result.written), len(result.failed))
    return result
