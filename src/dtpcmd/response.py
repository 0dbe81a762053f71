"""
Response builders — the caller-visible report of a run.

Turns a finished RenderingContext (or a failure) into the dictionary
the requesting layer sends back:

    {
        "success": bool,
        "messages": [...],
        "debugMode": bool,
        "commands": [...],      # success only
        "images": {...},        # when asset download is enabled
    }
"""

from __future__ import annotations

import logging
import traceback
from typing import Any, Callable, Dict, Optional

from dtpcmd.errors import CommandError
from dtpcmd.rendering import RenderingContext

logger = logging.getLogger(__name__)


def missing_asset_message(missing_assets: Dict[str, Any]) -> Optional[str]:
    """Summarize the queue's missing assets, or None when nothing is missing."""
    elements = missing_assets.get("elements", 0)
    if not elements:
        return None
    asset_ids = ", ".join(str(asset_id) for asset_id in sorted(missing_assets["assetIds"]))
    return f"{elements} placed element(s) reference missing assets: {asset_ids}"


def _build_response(data: Dict[str, Any], context: Optional[RenderingContext], debug: bool) -> Dict[str, Any]:
    data.setdefault("messages", [])
    data["debugMode"] = debug
    if context is None:
        return data

    pre_messages = context.get_pre_messages()
    notice = missing_asset_message(context.queue.get_missing_assets())
    if notice is not None:
        pre_messages.insert(0, notice)
    data["messages"] = data["messages"] + pre_messages

    if context.config.asset_download_enabled:
        data["images"] = context.queue.get_registered_assets()
    return data


def build_success_response(context: RenderingContext, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    response = dict(data or {})
    response["success"] = True
    response["commands"] = context.queue.get_commands()
    return _build_response(response, context, context.config.debug)


def build_error_response(exception: Exception, context: Optional[RenderingContext] = None,
                         debug: bool = False) -> Dict[str, Any]:
    """Report `exception`. With `debug`, the traceback is added as a second message."""
    messages = [str(exception)]
    if debug:
        messages.append("".join(traceback.format_exception(type(exception), exception, exception.__traceback__)))
    response = {"success": False, "messages": messages}
    return _build_response(response, context, debug)


def generate_publication(context: RenderingContext,
                         build_publication: Callable[[RenderingContext], Any]) -> Dict[str, Any]:
    """
    Run `build_publication` and report the result.

    A CommandError invalidates the whole stream, so the run is aborted
    and reported as failed. Other exceptions propagate.
    """
    try:
        context.run(build_publication)
    except CommandError as exc:
        logger.exception("Publication generation aborted")
        return build_error_response(exc, context, context.config.debug)
    return build_success_response(context)
