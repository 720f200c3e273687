"""Server-sent change events for admin dashboards"""

import json

from fastapi import APIRouter, Depends, Request
from sse_starlette.sse import EventSourceResponse

from tagchip.config import Config, get_config
from tagchip.middlewares.token import get_api_token
from tagchip.notifier import get_notifier
from tagchip.streams import ChangeStream


events_router = APIRouter(
    prefix="/events", tags=["Events"], dependencies=[Depends(get_api_token)]
)


@events_router.get("/")
async def stream_events(
    request: Request,
    project_id: int | None = None,
    config: Config = Depends(get_config),
):
    """
    Stream change events. Claim events of every project are always sent;
    `project_id` adds the tag events of that project.

    Events only say that something changed, clients re-fetch what they show.
    """
    stream = ChangeStream(get_notifier(), project_id=project_id)

    async def generate():
        stream.open()
        try:
            while not await request.is_disconnected():
                change = await stream.get(timeout=1.0)
                if change is not None:
                    yield {"event": change.topic, "data": json.dumps(change.as_dict())}
        finally:
            stream.close()

    return EventSourceResponse(generate(), ping=config.events_heartbeat)
