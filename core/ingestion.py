"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/ingestion.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Sequential batch ingestion. Feeds a queue of files through the
                extraction adapter one at a time, reports every per-file state
                change as an event and admits the collected records into the
                store in a single call once the batch is finished.
------------------------------------------------------------------------------
"""

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Union

from core.ai.base import ExtractionAdapter
from core.logger import get_logger, log_file_event
from core.models.record import FileProgress, IdentityRecord
from core.models.types import FileStatus, SourceType
from core.store import RecordStore

logger = get_logger("ingestion")

NO_RECORDS_MESSAGE = "No records found"
GENERIC_ERROR_MESSAGE = "Processing error"


@dataclass
class FileBlob:
    """
    A file queued for extraction. Blobs created from a path are read only
    when their turn in the batch comes.
    """
    name: str
    mime_type: str
    data: Optional[bytes] = None
    path: Optional[Path] = None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "FileBlob":
        """Creates a lazy blob. The mime type is guessed from the file name."""
        p = Path(path)
        mime_type, _ = mimetypes.guess_type(p.name)
        return cls(name=p.name, mime_type=mime_type or "application/octet-stream", path=p)

    def read(self) -> bytes:
        """
        Returns the file content.

        Raises:
            OSError: The file cannot be read.
        """
        if self.data is None:
            if self.path is None:
                raise OSError(f"{self.name}: no content")
            return self.path.read_bytes()
        return self.data

    def is_supported(self) -> bool:
        return is_supported_mime(self.mime_type)


def is_supported_mime(mime_type: Optional[str]) -> bool:
    """PDFs and images are accepted, everything else is ignored."""
    if not mime_type:
        return False
    return mime_type == "application/pdf" or mime_type.startswith("image/")


def collect_supported(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """Filters dropped paths down to existing PDF and image files, keeping order."""
    result: List[Path] = []
    for path in paths:
        p = Path(path)
        if not p.is_file():
            continue
        mime_type, _ = mimetypes.guess_type(p.name)
        if is_supported_mime(mime_type):
            result.append(p)
        else:
            logger.debug(f"Ignoring unsupported file: {p.name}")
    return result


class BatchRun:
    """
    One user-initiated batch.

    Iterating the run processes the files in queue order and yields a
    FileProgress snapshot for every state change: PROCESSING when a file's
    turn arrives, then DONE or FAILED. The store admission happens after
    the last file settled, before iteration ends.
    """

    def __init__(self, pipeline: "IngestionPipeline", files: Sequence[FileBlob]) -> None:
        self.pipeline = pipeline
        self.files: List[FileBlob] = list(files)
        self.queue: List[FileProgress] = [
            FileProgress(index=i, name=f.name) for i, f in enumerate(self.files)
        ]
        self.extracted: List[IdentityRecord] = []
        self.admitted: List[IdentityRecord] = []
        self.finished: bool = False
        self._started: bool = False

    def __iter__(self) -> Iterator[FileProgress]:
        if self._started:
            raise RuntimeError("A batch run can only be iterated once")
        self._started = True
        return self._run()

    def _update(self, index: int, **changes) -> FileProgress:
        self.queue[index] = self.queue[index].model_copy(update=changes)
        entry = self.queue[index]
        log_file_event(entry.name, entry.status.value, entry.error or entry.count)
        return entry

    def _run(self) -> Iterator[FileProgress]:
        extractor = self.pipeline.extractor
        source_type = self.pipeline.source_type
        logger.info(f"Batch started: {len(self.files)} file(s)")

        for i, blob in enumerate(self.files):
            yield self._update(i, status=FileStatus.PROCESSING)

            try:
                data = blob.read()
                records = extractor.extract(data, blob.mime_type, blob.name, source_type)
            except Exception as e:
                message = str(e) or GENERIC_ERROR_MESSAGE
                logger.warning(f"{blob.name}: extraction failed: {message}")
                yield self._update(i, status=FileStatus.FAILED, error=message)
                continue

            if records:
                self.extracted.extend(records)
                yield self._update(i, status=FileStatus.DONE, count=len(records))
            else:
                logger.warning(f"{blob.name}: {NO_RECORDS_MESSAGE}")
                yield self._update(i, status=FileStatus.FAILED, error=NO_RECORDS_MESSAGE)

        if self.extracted:
            self.admitted = self.pipeline.store.add_records(self.extracted)
        self.finished = True
        logger.info(
            f"Batch finished: {self.done_count} done, {self.failed_count} failed, "
            f"{len(self.extracted)} extracted, {len(self.admitted)} admitted"
        )

    @property
    def done_count(self) -> int:
        return sum(1 for q in self.queue if q.status == FileStatus.DONE)

    @property
    def failed_count(self) -> int:
        return sum(1 for q in self.queue if q.status == FileStatus.FAILED)

    @property
    def total_extracted(self) -> int:
        return sum(q.count or 0 for q in self.queue)


class IngestionPipeline:
    """
    Coordinator for document ingestion. Strictly one file at a time.
    """

    def __init__(
        self,
        extractor: ExtractionAdapter,
        store: RecordStore,
        source_type: SourceType = SourceType.LOCAL
    ) -> None:
        self.extractor = extractor
        self.store = store
        self.source_type = source_type

    def start(self, files: Sequence[FileBlob]) -> BatchRun:
        """Creates a run with every file PENDING. Nothing is processed until it is iterated."""
        return BatchRun(self, files)

    def ingest(
        self,
        files: Sequence[FileBlob],
        progress_callback: Optional[Callable[[FileProgress], None]] = None
    ) -> BatchRun:
        """
        Processes a whole batch.

        Args:
            files: The queued files in processing order.
            progress_callback: Optional callable receiving every FileProgress event.

        Returns:
            The finished run with per-file statuses and admitted records.
        """
        run = self.start(files)
        for event in run:
            if progress_callback:
                progress_callback(event)
        return run
