"""GOD Services booking client.

Hosts the in-app notification feed, theme preference and session helpers
for the booking web application on top of the Appwrite backend.
"""
