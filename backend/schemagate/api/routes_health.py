from fastapi import APIRouter, Response, status

router = APIRouter()


@router.get("/health")
def health() -> Response:
    """Liveness only; reachable once startup migrations completed."""
    return Response(status_code=status.HTTP_200_OK)
