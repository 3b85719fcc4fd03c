"""Game Haven — board-game catalog FastAPI backend.

Provides REST endpoints for the public catalog, guest ratings and
wishlist votes, BoardGameGeek import, and the hotlinked-image proxy.
"""
