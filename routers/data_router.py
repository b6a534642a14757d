from fastapi import APIRouter

from models.common_models import ChartRequest, ChartSpec, PreviewRequest
from routers.common import require_session
from services.preview_service import get_preview_rows

router = APIRouter(prefix="/data", tags=["data"])


@router.post("/preview")
async def preview_data(req: PreviewRequest):
    controller = require_session(req.session_id)
    return get_preview_rows(controller.model, req.n_rows)


@router.post("/charts", response_model=ChartSpec)
async def chart_data(req: ChartRequest):
    controller = require_session(req.session_id)
    return controller.charts(req.chart_type, render=req.render)
