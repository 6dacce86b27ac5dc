"""
Email subscriber endpoints.
"""
from datetime import date

from fastapi import APIRouter, Query, Request, Response, status
from pydantic import EmailStr

from funnelpress.core.deps import Subscriptions
from funnelpress.schemas.common import MessageResponse
from funnelpress.schemas.subscriber import (
    SubscribeRequest,
    SubscribeResponse,
    SubscriberListResponse,
    SubscriberResponse,
)
from funnelpress.services.attribution import USER_AGENT_MAX_LENGTH, client_ip

router = APIRouter(prefix="/subscribers", tags=["Subscribers"])


@router.get("", response_model=SubscriberListResponse)
async def list_subscribers(
    subscriptions: Subscriptions,
    site_id: str = Query(alias="siteId"),
    format: str = "json",
):
    """Subscribers with stats, or a CSV export with ``format=csv``."""
    if format == "csv":
        content = await subscriptions.export_csv(site_id)
        filename = f"subscribers-{site_id}-{date.today().isoformat()}.csv"
        return Response(
            content=content,
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    subscribers, stats = await subscriptions.list_with_stats(site_id)
    return SubscriberListResponse(
        subscribers=[SubscriberResponse.model_validate(s) for s in subscribers],
        stats=stats,
    )


@router.post("", response_model=SubscribeResponse)
async def subscribe(
    data: SubscribeRequest,
    request: Request,
    response: Response,
    subscriptions: Subscriptions,
):
    """Subscribe an address to a site's list."""
    user_agent = request.headers.get("user-agent")
    result = await subscriptions.subscribe(
        data,
        ip_address=client_ip(request.headers),
        user_agent=user_agent[:USER_AGENT_MAX_LENGTH] if user_agent else None,
    )
    if result.created:
        response.status_code = status.HTTP_201_CREATED
    return SubscribeResponse(
        message=result.message,
        subscriber_id=result.subscriber.id if result.subscriber else None,
    )


@router.delete("", response_model=MessageResponse)
async def unsubscribe(
    subscriptions: Subscriptions,
    email: EmailStr = Query(),
    site_id: str = Query(alias="siteId"),
):
    """Mark an address as unsubscribed."""
    await subscriptions.unsubscribe(site_id, email)
    return MessageResponse(message="Successfully unsubscribed")
