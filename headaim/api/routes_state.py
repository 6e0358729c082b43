from fastapi import APIRouter, HTTPException, Request

router = APIRouter()


def _world(request: Request):
    world = getattr(request.app.state, 'world', None)
    if world is None:
        raise HTTPException(status_code=503, detail="rig not loaded")
    return world


def _latest_report(request: Request):
    loop = getattr(request.app.state, 'targeting_loop', None)
    return loop.latest_report if loop else None


@router.get("/state")
def get_state(request: Request):
    world = _world(request)
    loop = getattr(request.app.state, 'targeting_loop', None)
    report = _latest_report(request)
    # target and angles from the same tick
    snap = world.snapshot(report)
    snap["running"] = bool(loop and loop.is_running())
    snap["last_seq"] = report.seq if report else 0
    return snap


@router.get("/fixtures")
def list_fixtures(request: Request):
    return {"fixtures": _world(request).snapshot(_latest_report(request))["fixtures"]}


@router.get("/fixtures/{name}")
def get_fixture(request: Request, name: str):
    fixtures = _world(request).snapshot(_latest_report(request))["fixtures"]
    for fixture in fixtures:
        if fixture["name"] == name:
            return fixture
    raise HTTPException(status_code=404, detail="no such fixture")


@router.get("/diagnostics")
def get_diagnostics(request: Request):
    report = _latest_report(request)
    if report is None:
        return {"seq": 0, "diagnostics": []}
    return {"seq": report.seq, "diagnostics": [d.to_dict() for d in report.diagnostics]}
# /state routes
