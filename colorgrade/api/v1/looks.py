from fastapi import APIRouter, HTTPException, status

from colorgrade.api.schemas import (
    LookResponse,
    ToneCurveEvaluateRequest,
    ToneCurveEvaluateResponse,
)
from colorgrade.presets.builtin import (
    PresetType,
    get_category,
    get_filter_settings,
    get_swatch,
)
from colorgrade.presets.tone_curve import ToneCurve

router = APIRouter()


def _look(preset_type: PresetType) -> LookResponse:
    return LookResponse(
        look=preset_type,
        category=get_category(preset_type),
        swatch=get_swatch(preset_type),
        settings=get_filter_settings(preset_type),
    )


@router.get("/looks", response_model=list[LookResponse])
async def list_looks():
    """Built-in looks in registry order."""
    return [_look(t) for t in PresetType]


@router.get("/looks/{label}", response_model=LookResponse)
async def get_look(label: str):
    try:
        preset_type = PresetType(label)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Look not found")
    return _look(preset_type)


@router.post("/tone-curve/evaluate", response_model=ToneCurveEvaluateResponse)
async def evaluate_tone_curve(request: ToneCurveEvaluateRequest):
    """Evaluate a tone curve (identity curve when no points are given)."""
    try:
        curve = ToneCurve(request.points)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return ToneCurveEvaluateResponse(x=request.x, y=curve.evaluate(request.x))
