"""
Attachment resolution: which screenshots and video belong to a test.

Cypress names screenshot files after the test's title segments joined with
``" -- "``, so a screenshot is a candidate for a test when its path contains
that key.  Screenshots taken on failure carry a ``"(failed)"`` marker.
"""

import base64
from typing import List, Optional

from .ctrf_models import CtrfAttachment
from .cypress_types import CypressTest, Screenshot, SpecResults
from .filesystem import Filesystem
from .logger_config import get_logger

logger = get_logger(__name__)

SCREENSHOT_TITLE_SEPARATOR = " -- "
FAILED_SCREENSHOT_MARKER = "(failed)"
SCREENSHOT_CONTENT_TYPE = "image/png"
VIDEO_CONTENT_TYPE = "video/mp4"


def screenshot_key(test: CypressTest) -> str:
    return SCREENSHOT_TITLE_SEPARATOR.join(test.title)


def find_test_screenshots(test: CypressTest, screenshots: List[Screenshot]) -> List[Screenshot]:
    """Return every screenshot whose path names ``test``, in original order."""
    key = screenshot_key(test)
    return [s for s in screenshots if s.path and key in s.path]


def select_representative(candidates: List[Screenshot]) -> Optional[Screenshot]:
    """Pick the screenshot that best represents a test.

    The first failure-marked candidate wins; otherwise the last candidate,
    since later attempts overwrite earlier ones.
    """
    if not candidates:
        return None
    for candidate in candidates:
        if FAILED_SCREENSHOT_MARKER in candidate.path:
            return candidate
    return candidates[-1]


def resolve_screenshot(
    test: CypressTest,
    results: SpecResults,
    filesystem: Filesystem,
    capture_enabled: bool,
) -> Optional[str]:
    """Return the representative screenshot of ``test`` as base64 text.

    Returns None when capture is disabled, nothing matches, or the file
    cannot be read.
    """
    if not capture_enabled:
        return None

    chosen = select_representative(find_test_screenshots(test, results.screenshots))
    if chosen is None:
        return None

    try:
        data = filesystem.read_binary(chosen.path)
    except OSError as e:
        logger.warning(f"Error reading screenshot file {chosen.path}: {e}")
        return None
    return base64.b64encode(data).decode("ascii")


def screenshot_attachments(test: CypressTest, results: SpecResults) -> List[CtrfAttachment]:
    """Reference every matching screenshot of ``test``; no file is read."""
    return [
        CtrfAttachment(name="screenshot", content_type=SCREENSHOT_CONTENT_TYPE, path=s.path)
        for s in find_test_screenshots(test, results.screenshots)
    ]


def video_attachment(results: SpecResults, filesystem: Filesystem) -> Optional[CtrfAttachment]:
    """Return the spec video as an attachment when the file exists."""
    video = results.video
    if video is None or not video.strip():
        return None

    try:
        found = filesystem.exists(video)
    except OSError as e:
        logger.warning(f"Error processing video attachment {video}: {e}")
        return None

    if not found:
        logger.warning(f"Video file not found: {video}")
        return None
    return CtrfAttachment(name="video", content_type=VIDEO_CONTENT_TYPE, path=video)


def collect_attachments(test: CypressTest, results: SpecResults, filesystem: Filesystem) -> List[CtrfAttachment]:
    """All attachments of ``test``: matched screenshots, then the spec video."""
    attachments = screenshot_attachments(test, results)
    video = video_attachment(results, filesystem)
    if video is not None:
        attachments.append(video)
    return attachments
