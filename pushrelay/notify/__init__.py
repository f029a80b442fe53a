"""Notification requests, APNs and FCM payload builders, and delivery feedback."""