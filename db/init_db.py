from pymongo import ASCENDING, DESCENDING

async def init_db_indexes(db):
    """
    Initialize database with required indexes
    """
    # Accounts
    await db.users.create_index([("email", ASCENDING)], unique=True)

    # Inbox: "all messages where viewer is sender or receiver"
    await db.messages.create_index([("sender_id", ASCENDING), ("created_at", DESCENDING)])
    await db.messages.create_index([("receiver_id", ASCENDING), ("created_at", DESCENDING)])
    await db.messages.create_index([("conversation_id", ASCENDING), ("receiver_id", ASCENDING), ("is_read", ASCENDING)])

    # Opportunities and applications
    await db.opportunities.create_index([("company_id", ASCENDING)])
    await db.opportunities.create_index([("created_at", DESCENDING)])
    await db.applications.create_index([("opportunity_id", ASCENDING), ("user_id", ASCENDING)], unique=True)
    await db.applications.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])

    # Uploads
    await db.files.create_index([("file_id", ASCENDING)], unique=True)
    await db.student_portfolio.create_index([("student_id", ASCENDING), ("created_at", DESCENDING)])

    # Notification feed
    await db.notifications.create_index([("recipient_id", ASCENDING), ("created_at", DESCENDING)])
