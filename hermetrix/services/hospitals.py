"""Nearby-hospitals directory. Static mock data; no geolocation lookup."""

MOCK_HOSPITALS: list[dict] = [
    {
        "id": "1",
        "name": "City General Hospital",
        "distance": 0.8,
        "address": "123 Medical Ave, Downtown",
        "phone": "+1 (555) 100-1000",
        "emergency": True,
        "rating": 4.8,
    },
    {
        "id": "2",
        "name": "Women's Health Center",
        "distance": 1.2,
        "address": "456 Health Blvd, Midtown",
        "phone": "+1 (555) 200-2000",
        "emergency": True,
        "rating": 4.9,
    },
    {
        "id": "3",
        "name": "Medical Care Clinic",
        "distance": 1.5,
        "address": "789 Care St, Uptown",
        "phone": "+1 (555) 300-3000",
        "emergency": False,
        "rating": 4.5,
    },
    {
        "id": "4",
        "name": "Emergency Medical Center",
        "distance": 2.1,
        "address": "321 Emergency Lane, Industrial",
        "phone": "+1 (555) 400-4000",
        "emergency": True,
        "rating": 4.7,
    },
]


def search_hospitals(query: str | None = None, emergency_only: bool = False) -> list[dict]:
    """Case-insensitive match on name or address, nearest first."""
    q = (query or "").strip().lower()
    rows = [
        h
        for h in MOCK_HOSPITALS
        if (not q or q in h["name"].lower() or q in h["address"].lower())
        and (not emergency_only or h["emergency"])
    ]
    return sorted(rows, key=lambda h: h["distance"])
