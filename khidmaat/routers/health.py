from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/")
def root():
    return {"status": "Khidmaat backend is running"}


@router.get("/health")
def health():
    return {"ok": True}
