"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when you first write a document. Use these constants so collection names
stay consistent with the mobile and web clients, which read some of them
(conversations, users) directly.

Layout:
    users/{uid}
    users/{uid}/notifications/{notificationId}
    users/{uid}/favorites/{productId}
    products/{productId}
    products/{productId}/reviews/{reviewerUid}
    carts/{uid}
    orders/{orderId}
    conversations/{uidA_uidB}
    conversations/{conversationId}/messages/{messageId}
"""

COLLECTION_USERS = "users"
COLLECTION_PRODUCTS = "products"
COLLECTION_CARTS = "carts"
COLLECTION_ORDERS = "orders"
COLLECTION_CONVERSATIONS = "conversations"

# Subcollections
SUBCOLLECTION_NOTIFICATIONS = "notifications"
SUBCOLLECTION_FAVORITES = "favorites"
SUBCOLLECTION_REVIEWS = "reviews"
SUBCOLLECTION_MESSAGES = "messages"
