"""Tests for review endpoints."""
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from httpx import AsyncClient

from models.user import User

ClientFactory = Callable[[User | None], AbstractAsyncContextManager[AsyncClient]]


def review_payload(**overrides: object) -> dict:
    """Build a valid review request body."""
    payload: dict = {
        "country_id": "japan",
        "country_name": "Japan",
        "rating": 5,
        "review_text": "Incredible food and very friendly people.",
        "is_anonymous": False,
    }
    payload.update(overrides)
    return payload


async def test_create_review(client_as: ClientFactory, user_a: User) -> None:
    """Test that posting a review returns it with author fields."""
    async with client_as(user_a) as client_a:
        response = await client_a.post(
            "/api/reviews",
            json=review_payload(review_text="  Loved every minute.  "),
        )
    assert response.status_code == 201

    data = response.json()
    assert data["user_id"] == user_a.id
    assert data["country_id"] == "japan"
    assert data["country_name"] == "Japan"
    assert data["rating"] == 5
    assert data["review_text"] == "Loved every minute."
    assert data["is_anonymous"] is False
    assert data["username"] == "alice"
    assert data["first_name"] == "Alice"
    assert data["profile_image_url"] == "https://img.example.com/alice.png"
    assert data["created_at"] is not None


async def test_create_review_defaults_country_id_to_slug(
    client_as: ClientFactory,
    user_a: User,
) -> None:
    """Test that a missing country_id is derived from the country name."""
    payload = review_payload(country_name="United  States")
    del payload["country_id"]

    async with client_as(user_a) as client_a:
        response = await client_a.post("/api/reviews", json=payload)
    assert response.status_code == 201
    assert response.json()["country_id"] == "united-states"


async def test_create_review_at_max_length(client_as: ClientFactory, user_a: User) -> None:
    """Test that review text of exactly the maximum length is accepted."""
    async with client_as(user_a) as client_a:
        response = await client_a.post("/api/reviews", json=review_payload(review_text="x" * 250))
    assert response.status_code == 201


async def test_create_review_too_long_returns_400(
    client_as: ClientFactory,
    user_a: User,
) -> None:
    """Test that review text over the maximum length is rejected and nothing is stored."""
    async with client_as(user_a) as client_a:
        response = await client_a.post("/api/reviews", json=review_payload(review_text="x" * 251))
        assert response.status_code == 400
        assert response.json()["detail"] == "Review text must be 250 characters or less"

        listing = await client_a.get("/api/reviews/country/japan")
    assert listing.json()["stats"]["total_reviews"] == 0


async def test_create_review_padded_over_max_length_returns_400(
    client_as: ClientFactory,
    user_a: User,
) -> None:
    """Test that the length limit applies to the text as submitted, before trimming."""
    async with client_as(user_a) as client_a:
        response = await client_a.post(
            "/api/reviews", json=review_payload(review_text=" " * 2 + "a" * 250),
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Review text must be 250 characters or less"

        listing = await client_a.get("/api/reviews/country/japan")
    assert listing.json()["stats"]["total_reviews"] == 0


async def test_create_review_empty_text_returns_422(
    client_as: ClientFactory,
    user_a: User,
) -> None:
    """Test that whitespace-only review text is rejected."""
    async with client_as(user_a) as client_a:
        response = await client_a.post("/api/reviews", json=review_payload(review_text="   "))
    assert response.status_code == 422


async def test_create_review_rating_out_of_range_returns_422(
    client_as: ClientFactory,
    user_a: User,
) -> None:
    """Test that ratings outside 1-5 are rejected."""
    async with client_as(user_a) as client_a:
        low = await client_a.post("/api/reviews", json=review_payload(rating=0))
        high = await client_a.post("/api/reviews", json=review_payload(rating=6))
    assert low.status_code == 422
    assert high.status_code == 422


async def test_create_review_requires_auth(client_as: ClientFactory) -> None:
    """Test that posting a review without a token returns 401."""
    async with client_as(None) as anonymous:
        response = await anonymous.post("/api/reviews", json=review_payload())
    assert response.status_code == 401


async def test_country_reviews_with_no_reviews(client_as: ClientFactory) -> None:
    """Test that a country with no reviews has zeroed stats."""
    async with client_as(None) as anonymous:
        response = await anonymous.get("/api/reviews/country/atlantis")
    assert response.status_code == 200
    assert response.json() == {
        "reviews": [],
        "stats": {"average_rating": 0.0, "total_reviews": 0},
    }


async def test_country_reviews_newest_first_with_stats(
    client_as: ClientFactory,
    user_a: User,
    user_b: User,
) -> None:
    """Test listing order and aggregate stats across several authors."""
    async with client_as(user_a) as client_a:
        await client_a.post("/api/reviews", json=review_payload(rating=5, review_text="First"))
    async with client_as(user_b) as client_b:
        await client_b.post("/api/reviews", json=review_payload(rating=2, review_text="Second"))
        await client_b.post(
            "/api/reviews",
            json=review_payload(country_id="peru", country_name="Peru", review_text="Other"),
        )

    async with client_as(None) as anonymous:
        response = await anonymous.get("/api/reviews/country/japan")
    assert response.status_code == 200

    data = response.json()
    assert [r["review_text"] for r in data["reviews"]] == ["Second", "First"]
    assert [r["username"] for r in data["reviews"]] == ["bob", "alice"]
    assert data["stats"] == {"average_rating": 3.5, "total_reviews": 2}


async def test_country_reviews_pagination(client_as: ClientFactory, user_a: User) -> None:
    """Test limit/offset paging while stats still cover every review."""
    async with client_as(user_a) as client_a:
        for i in range(3):
            await client_a.post("/api/reviews", json=review_payload(review_text=f"Visit {i}"))

        first_page = await client_a.get("/api/reviews/country/japan?limit=2")
        second_page = await client_a.get("/api/reviews/country/japan?limit=2&offset=2")

    assert [r["review_text"] for r in first_page.json()["reviews"]] == ["Visit 2", "Visit 1"]
    assert [r["review_text"] for r in second_page.json()["reviews"]] == ["Visit 0"]
    assert first_page.json()["stats"]["total_reviews"] == 3


async def test_country_reviews_invalid_limit_returns_422(client_as: ClientFactory) -> None:
    """Test that non-positive limits are rejected."""
    async with client_as(None) as anonymous:
        response = await anonymous.get("/api/reviews/country/japan?limit=0")
    assert response.status_code == 422


async def test_anonymous_review_hides_author_everywhere(
    client_as: ClientFactory,
    user_a: User,
) -> None:
    """Test that anonymous reviews carry no author display fields in any listing."""
    async with client_as(user_a) as client_a:
        created = await client_a.post("/api/reviews", json=review_payload(is_anonymous=True))
    assert created.status_code == 201
    assert created.json()["username"] is None
    assert created.json()["first_name"] is None

    async with client_as(None) as anonymous:
        by_country = await anonymous.get("/api/reviews/country/japan")
        by_user = await anonymous.get(f"/api/reviews/user/{user_a.id}")

    for review in (by_country.json()["reviews"][0], by_user.json()[0]):
        assert review["is_anonymous"] is True
        assert review["username"] is None
        assert review["first_name"] is None
        assert review["last_name"] is None
        assert review["profile_image_url"] is None


async def test_user_reviews(client_as: ClientFactory, user_a: User, user_b: User) -> None:
    """Test that user review listings only include that user's reviews."""
    async with client_as(user_a) as client_a:
        await client_a.post("/api/reviews", json=review_payload())
        await client_a.post(
            "/api/reviews",
            json=review_payload(country_id="peru", country_name="Peru"),
        )
    async with client_as(user_b) as client_b:
        await client_b.post("/api/reviews", json=review_payload())

        response = await client_b.get(f"/api/reviews/user/{user_a.id}")
    assert response.status_code == 200
    assert [r["country_id"] for r in response.json()] == ["peru", "japan"]
    assert all(r["user_id"] == user_a.id for r in response.json())


async def test_delete_own_review(client_as: ClientFactory, user_a: User) -> None:
    """Test that authors can delete their reviews."""
    async with client_as(user_a) as client_a:
        created = await client_a.post("/api/reviews", json=review_payload())
        review_id = created.json()["id"]

        response = await client_a.delete(f"/api/reviews/{review_id}")
        assert response.status_code == 200
        assert response.json() == {"message": "Review deleted successfully"}

        listing = await client_a.get("/api/reviews/country/japan")
    assert listing.json()["reviews"] == []


async def test_delete_other_users_review_returns_404(
    client_as: ClientFactory,
    user_a: User,
    user_b: User,
) -> None:
    """Test that deleting someone else's review fails and leaves it in place."""
    async with client_as(user_a) as client_a:
        created = await client_a.post("/api/reviews", json=review_payload())
    review_id = created.json()["id"]

    async with client_as(user_b) as client_b:
        response = await client_b.delete(f"/api/reviews/{review_id}")
        assert response.status_code == 404
        assert response.json()["detail"] == "Review not found or unauthorized"

        listing = await client_b.get("/api/reviews/country/japan")
    assert [r["id"] for r in listing.json()["reviews"]] == [review_id]


async def test_delete_missing_review_returns_404(client_as: ClientFactory, user_a: User) -> None:
    """Test that deleting a non-existent review returns 404."""
    async with client_as(user_a) as client_a:
        response = await client_a.delete("/api/reviews/987654321")
    assert response.status_code == 404
