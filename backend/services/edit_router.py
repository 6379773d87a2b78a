import logging
from enum import Enum

from models.edit import EditAction, EditRequest, GeneratedImage
from services.stability_service import StabilityService

logger = logging.getLogger(__name__)

DEFAULT_STRENGTH = 0.8


class EditOperation(str, Enum):
    SEARCH_AND_REPLACE = "search_and_replace"
    INPAINT = "inpaint"


def select_operation(request: EditRequest) -> EditOperation:
    """
    Two-branch decision table:

    - REMOVE with a subject and no user mask -> search-and-replace, the
      provider finds the region from the subject
    - anything else (ADD, CHANGE, no action, or REMOVE with a drawn mask) -> inpaint
    """
    if request.action == EditAction.REMOVE and request.subject and request.mask is None:
        return EditOperation.SEARCH_AND_REPLACE
    return EditOperation.INPAINT


async def dispatch_edit(
    request: EditRequest,
    stability: StabilityService,
    default_strength: float = DEFAULT_STRENGTH,
) -> GeneratedImage:
    operation = select_operation(request)
    logger.info("Routing edit to %s (action=%s, mask=%s)", operation.value, request.action, request.mask is not None)

    if operation == EditOperation.SEARCH_AND_REPLACE:
        return await stability.search_and_replace(
            request.image,
            search_prompt=request.subject,
            prompt=request.prompt,
            negative_prompt=request.subject,
        )

    return await stability.inpaint(
        request.image,
        prompt=request.prompt,
        mask=request.mask,
        negative_prompt=request.negative_prompt,
        strength=request.strength if request.strength is not None else default_strength,
    )
