import pytest

from readinglog.errors import InvalidPayloadError
from readinglog.schemas.review import ReviewCreate, ReviewUpdate
from readinglog.services.library import Library


async def test_add_and_find(library, make_book):
    book_id = await make_book(status="completed")
    result = await library.reviews.add(
        ReviewCreate(book_id=book_id, rating=5, short_review="Superb", detailed_review="Long form")
    )
    assert result.message == "Review added successfully."
    review = await library.reviews.find_for_book(book_id)
    assert (review.id, review.rating, review.detailed_review) == (result.id, 5, "Long form")
    assert review.created_at


async def test_several_reviews_per_book_allowed(library, make_book):
    book_id = await make_book()
    await library.reviews.add(ReviewCreate(book_id=book_id, rating=3))
    await library.reviews.add(ReviewCreate(book_id=book_id, rating=4))
    assert [r.rating for r in await library.reviews.list_for_book(book_id)] == [3, 4]


async def test_update_review(library, make_book):
    book_id = await make_book()
    review_id = (await library.reviews.add(ReviewCreate(book_id=book_id, rating=3))).id
    await library.reviews.update(review_id, ReviewUpdate(rating=4, short_review="Grew on me"))
    review = await library.reviews.get_by_id(review_id)
    assert (review.rating, review.short_review, review.book_id) == (4, "Grew on me", book_id)


def test_rating_out_of_range():
    with pytest.raises(ValueError):
        ReviewCreate(book_id="b", rating=6)


async def test_reject_policy_requires_rating(workbook):
    library = Library(workbook, missing_fields="reject")
    with pytest.raises(InvalidPayloadError, match="rating"):
        await library.reviews.add(ReviewCreate(book_id="b"))
