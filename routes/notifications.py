from fastapi import APIRouter, HTTPException, Response, status, Query
from models.notifications_model import NotificationResponse
from dependencies.auth import CurrentActiveUser
from dependencies.notifications import NotificationServiceDep

router = APIRouter()

@router.get("/", response_model=list[NotificationResponse])
async def get_user_notifications(
    current_user: CurrentActiveUser,
    notification_service: NotificationServiceDep,
    unread_only: bool = Query(False, description="Return only unread notifications")
):
    """Get the application notifications of the current user

    Parameters:
    - unread_only: If True, returns only unread notifications
    """
    try:
        return await notification_service.get_user_notifications(current_user.id, unread_only)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to get notifications: {str(e)}"
        )

@router.post("/mark-as-read/{notification_id}", response_model=NotificationResponse)
async def mark_notification_as_read(
    notification_id: str,
    current_user: CurrentActiveUser,
    notification_service: NotificationServiceDep
):
    """Mark a specific notification as read"""
    return await notification_service.mark_notification_as_read(notification_id, current_user.id)

@router.post("/mark-all-as-read/", status_code=status.HTTP_204_NO_CONTENT)
async def mark_all_notifications_as_read(
    current_user: CurrentActiveUser,
    notification_service: NotificationServiceDep
):
    """Mark all notifications for the current user as read"""
    await notification_service.mark_all_notifications_as_read(current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: str,
    current_user: CurrentActiveUser,
    notification_service: NotificationServiceDep
):
    """Delete a specific notification"""
    await notification_service.delete_notification(notification_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
