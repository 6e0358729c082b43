from fastapi import APIRouter, Request

from headaim.core.event_log import get_event_log

router = APIRouter()


@router.get("/events")
def list_events(request: Request, limit: int = 100):
    event_log = getattr(request.app.state, 'event_log', None)
    if event_log is None:
        event_log = get_event_log()
    return {"events": event_log.list_events(limit)}
# /events routes
