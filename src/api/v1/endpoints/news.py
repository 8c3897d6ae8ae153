from fastapi import APIRouter, Depends, HTTPException
import structlog

from ...dependencies import get_current_user_id, get_news_service, get_verification_service
from ....exceptions import DatabaseError, NotFoundError, ValidationError, VerificationError
from ....services.news_service import NewsService
from ....services.verification_service import VerificationService
from ..schemas import NewsResponse, NewsSubmissionRequest, NewsVerificationResponse, UserNewsListResponse

logger = structlog.get_logger(__name__)

router = APIRouter()

SERVICE_UNAVAILABLE_HINT = (
    "The fact-checking service is currently unavailable. "
    "Please try again later or contact support if the issue persists."
)


@router.post("/submit", response_model=NewsResponse, status_code=201)
async def submit_news(
    request: NewsSubmissionRequest,
    user_id: str = Depends(get_current_user_id),
    news_service: NewsService = Depends(get_news_service)
):
    try:
        news = news_service.submit_news(
            user_id=user_id,
            content=request.content,
            link=request.link,
            photo_url=request.photo_url
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except DatabaseError as e:
        logger.error("Failed to submit news", user_id=user_id, error=e.message)
        raise HTTPException(status_code=500, detail="Failed to submit news")

    return NewsResponse.model_validate(news)


@router.get("/verify/{news_id}", response_model=NewsVerificationResponse)
async def verify_news(
    news_id: str,
    user_id: str = Depends(get_current_user_id),
    news_service: NewsService = Depends(get_news_service),
    verification_service: VerificationService = Depends(get_verification_service)
):
    if not news_id:
        raise HTTPException(status_code=400, detail="News ID is required")

    try:
        news = news_service.get_news_by_id(news_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="News not found")
    except DatabaseError as e:
        logger.error("Failed to get news", news_id=news_id, error=e.message)
        raise HTTPException(status_code=500, detail="Failed to get news")

    if news.user_id != user_id:
        logger.warning("Verification denied for non-owner", news_id=news_id, user_id=user_id)
        raise HTTPException(status_code=403, detail="Access denied")

    try:
        status, explanation = await verification_service.verify_news(news.content, news.link, news.photo_url)
    except VerificationError as e:
        logger.error("Failed to verify news", news_id=news_id, error=e.message, error_code=e.error_code)
        raise HTTPException(
            status_code=500,
            detail={"error": e.message or "Failed to verify news", "details": SERVICE_UNAVAILABLE_HINT}
        )

    try:
        news_service.update_news_status(news.id, status, explanation)
    except (NotFoundError, DatabaseError, ValidationError) as e:
        logger.error("Failed to update news status", news_id=news_id, error=e.message)
        raise HTTPException(status_code=500, detail="Failed to update news status")

    return NewsVerificationResponse(id=news.id, status=status, explanation=explanation)


@router.get("/user/{owner_id}", response_model=UserNewsListResponse)
async def get_user_news(
    owner_id: str,
    user_id: str = Depends(get_current_user_id),
    news_service: NewsService = Depends(get_news_service)
):
    if not owner_id:
        raise HTTPException(status_code=400, detail="User ID is required")

    if owner_id != user_id:
        raise HTTPException(status_code=403, detail="Access denied")

    try:
        news_list = news_service.get_user_news(owner_id)
    except (DatabaseError, ValidationError) as e:
        logger.error("Failed to get user news", user_id=owner_id, error=e.message)
        raise HTTPException(status_code=500, detail="Failed to retrieve news")

    return UserNewsListResponse(
        news=[NewsResponse.model_validate(n) for n in news_list],
        count=len(news_list)
    )
