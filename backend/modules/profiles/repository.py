"""
Profile repository for database access.

Encapsulates Supabase queries against the ``players`` table.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .models import PlayerProfile


class ProfileRepository(BaseRepository[PlayerProfile]):
    """
    Repository for player profile rows.

    Note: This repository does NOT perform authorization checks.
    """

    def get_by_auth_user_id(self, user_id: str) -> Optional[PlayerProfile]:
        """Get the player row owned by an identity."""
        row = self._first(
            self._db.table("players").select("*").eq("auth_user_id", user_id).limit(1).execute()
        )
        return self._map_to_profile(row) if row else None

    def find_handle_owner(
        self,
        gamer_handle: str,
        exclude_player_id: Optional[str] = None,
    ) -> Optional[str]:
        """
        Find the player using a gamer handle.

        Args:
            gamer_handle: Handle to look up.
            exclude_player_id: Player to ignore (the one being updated).

        Returns:
            ID of the owning player, or None if the handle is free.
        """
        query = self._db.table("players").select("id").eq("gamer_handle", gamer_handle)
        if exclude_player_id is not None:
            query = query.neq("id", exclude_player_id)
        row = self._first(query.limit(1).execute())
        return str(row["id"]) if row else None

    def update_name_and_handle(
        self,
        player_id: str,
        name: str,
        gamer_handle: str,
    ) -> Optional[PlayerProfile]:
        """Set name and handle; returns the updated row."""
        result = (
            self._db.table("players")
            .update({"name": name, "gamer_handle": gamer_handle})
            .eq("id", player_id)
            .execute()
        )
        row = self._first(result)
        return self._map_to_profile(row) if row else None

    @staticmethod
    def _map_to_profile(data: dict[str, Any]) -> PlayerProfile:
        return PlayerProfile(
            player_id=str(data["id"]),
            auth_user_id=data.get("auth_user_id"),
            email=data.get("email"),
            name=data.get("name"),
            gamer_handle=data.get("gamer_handle"),
        )
