from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from core.logging_config import get_logger
from core.security import require_api_key
from database import get_db
from model.content_schema import ReviewRequest
from model.review_model import Review

logger = get_logger(__name__)

router = APIRouter(prefix="/api/reviews", tags=["Reviews"], dependencies=[Depends(require_api_key)])


def review_to_dict(review: Review) -> dict:
    return {
        "id": review.id,
        "name": review.name,
        "role": review.role,
        "image": review.image,
        "rating": review.rating,
        "reviewText": review.review_text,
        "createdAt": review.created_at,
    }


def _get_or_404(db: Session, review_id: int) -> Review:
    review = db.query(Review).filter(Review.id == review_id).first()
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    return review


@router.get("/")
def list_reviews(db: Session = Depends(get_db)):
    return [review_to_dict(r) for r in db.query(Review).order_by(Review.id).all()]


@router.post("/", status_code=201)
def create_review(request: ReviewRequest, db: Session = Depends(get_db)):
    review = Review(**request.model_dump())
    db.add(review)
    db.commit()
    db.refresh(review)
    logger.info("Review %s created", review.id)
    return review_to_dict(review)


@router.put("/{review_id}")
def update_review(review_id: int, request: ReviewRequest, db: Session = Depends(get_db)):
    review = _get_or_404(db, review_id)
    for field, value in request.model_dump(exclude_unset=True).items():
        setattr(review, field, value)
    db.commit()
    db.refresh(review)
    return review_to_dict(review)


@router.delete("/{review_id}")
def delete_review(review_id: int, db: Session = Depends(get_db)):
    review = _get_or_404(db, review_id)
    db.delete(review)
    db.commit()
    logger.info("Review %s deleted", review_id)
    return {"message": "Review deleted successfully"}
