from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

router = APIRouter()


class SampleRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    x: float = Field(default=0.0, ge=-1.0, le=1.0)
    y: float = Field(default=0.0, ge=-1.0, le=1.0)
    z: float = Field(default=0.0, ge=-1.0, le=1.0)


@router.post("/input/sample")
def push_sample(request: Request, body: SampleRequest):
    holder = getattr(request.app.state, 'input_holder', None)
    if holder is None:
        raise HTTPException(status_code=409, detail="no pushable input source configured")
    holder.push((body.x, body.y, body.z))
    return {"ok": True}


@router.post("/input/release")
def release(request: Request):
    holder = getattr(request.app.state, 'input_holder', None)
    if holder is not None:
        holder.reset()
    return {"ok": True}


@router.post("/target/home")
def home(request: Request):
    world = getattr(request.app.state, 'world', None)
    if world is None:
        raise HTTPException(status_code=503, detail="rig not loaded")
    return {"position": world.target.home().as_dict()}
# /input routes
