from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/", summary="Health check", operation_id="healthCheck")
async def health_check() -> dict[str, str]:
    return {"status": "ok", "service": "foodgarden"}
