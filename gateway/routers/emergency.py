"""
gateway/routers/emergency.py

Emergency number and first-aid reference endpoints.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from gateway.schemas import EmergencyContact, FirstAidTopic
from gateway.services.first_aid import get_topic, search_topics
from gateway.services.geolocation import emergency_number_for, resolve_country_code

router = APIRouter(tags=["emergency"])


async def _emergency_contact(lat: Optional[float], lon: Optional[float]) -> EmergencyContact:
    country_code = await resolve_country_code(lat, lon)
    return EmergencyContact(
        country_code=country_code,
        emergency_number=emergency_number_for(country_code),
    )


@router.get("/emergency-number", response_model=EmergencyContact)
async def emergency_number(
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
) -> EmergencyContact:
    return await _emergency_contact(lat, lon)


@router.get("/first-aid", response_model=list[FirstAidTopic])
async def first_aid_topics(
    q: str = "",
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
) -> list[FirstAidTopic]:
    contact = await _emergency_contact(lat, lon)
    return search_topics(q, contact.emergency_number)


@router.get("/first-aid/{title}", response_model=FirstAidTopic)
async def first_aid_topic(
    title: str,
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
) -> FirstAidTopic:
    contact = await _emergency_contact(lat, lon)
    topic = get_topic(title, contact.emergency_number)
    if topic is None:
        raise HTTPException(status_code=404, detail="First-aid topic not found")
    return topic
