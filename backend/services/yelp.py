"""Yelp Fusion business search. Stateless: nothing is cached or stored."""

import httpx

YELP_SEARCH_URL = "https://api.yelp.com/v3/businesses/search"


def business_summary(business: dict) -> dict:
    return {
        "name": business["name"],
        "image_url": business.get("image_url"),
        "price": business.get("price"),
        "rating": business.get("rating"),
        "url": business.get("url"),
    }


async def search_businesses(client: httpx.AsyncClient, api_key: str | None, location: str) -> list[dict]:
    resp = await client.get(
        YELP_SEARCH_URL,
        params={"location": location},
        headers={"Authorization": f"Bearer {api_key}"},
    )
    resp.raise_for_status()
    return [business_summary(b) for b in resp.json()["businesses"]]
