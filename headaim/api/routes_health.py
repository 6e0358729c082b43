import time

from fastapi import APIRouter, Request

router = APIRouter()


@router.get('/health')
def health(request: Request):
    loop = getattr(request.app.state, 'targeting_loop', None)
    report = loop.latest_report if loop else None
    mqtt_mgr = getattr(request.app.state, 'mqtt_manager', None)

    return {
        'ts_ms': int(time.time() * 1000),
        'loop_running': bool(loop and loop.is_running()),
        'last_tick_ms': report.ts_ms if report else None,
        'last_tick_ok': report.ok if report else None,
        'mqtt_ok': mqtt_mgr.connected if mqtt_mgr else None,
    }
