"""Application context for explicit state passing.

AppContext bundles everything the player operates on: configuration, catalog,
view, playback state, shuffle history and the two OS resources (engine process
and control socket). It is passed to every player operation, which returns an
updated context instead of touching module globals.
"""

import random
from dataclasses import dataclass, field, replace
from typing import Optional

from jukebox.core.config import Config
from jukebox.domain.library.catalog import Catalog
from jukebox.domain.playback.channel import ControlChannel
from jukebox.domain.playback.shuffle import ShuffleHistory
from jukebox.domain.playback.state import PlaybackState, clamp_volume
from jukebox.domain.playback.supervisor import EngineSupervisor
from jukebox.domain.playback.view import ViewState, create_view


@dataclass(frozen=True)
class AppContext:
    """Application context passed to all player operations.

    Attributes:
        config: Application configuration
        catalog: Tracks discovered at startup
        view: Projected view, cursor and scroll window
        playback: Transport and mode state
        shuffle_history: Tracks played in the current shuffle cycle
        supervisor: Owner of the engine subprocess (mutable resource)
        channel: Control socket connection (mutable resource)
        rng: Random source for shuffle picks
    """

    config: Config
    catalog: Catalog
    view: ViewState
    playback: PlaybackState
    supervisor: EngineSupervisor
    channel: ControlChannel
    shuffle_history: ShuffleHistory = field(default_factory=ShuffleHistory)
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def create(
        cls,
        config: Config,
        catalog: Catalog,
        supervisor: Optional[EngineSupervisor] = None,
        channel: Optional[ControlChannel] = None,
        rng: Optional[random.Random] = None,
        list_rows: int = 20,
    ) -> "AppContext":
        """Create initial application context.

        Args:
            config: Application configuration
            catalog: Scanned catalog
            supervisor: Engine supervisor (default: built from config)
            channel: Control channel (default: built from config)
            rng: Random source (default: fresh random.Random)
            list_rows: Rows available for the track list

        Returns:
            New AppContext with nothing playing and the cursor on the first track
        """
        player_config = config.player
        if supervisor is None:
            supervisor = EngineSupervisor(
                socket_path=player_config.socket_path, engine=player_config.engine
            )
        if channel is None:
            channel = ControlChannel(
                socket_path=player_config.socket_path,
                poll_interval=player_config.poll_interval,
                poll_attempts=player_config.poll_attempts,
            )

        return cls(
            config=config,
            catalog=catalog,
            view=create_view(catalog, list_rows),
            playback=PlaybackState(volume=clamp_volume(player_config.volume)),
            supervisor=supervisor,
            channel=channel,
            rng=rng or random.Random(),
        )

    def with_view(self, view: ViewState) -> "AppContext":
        return replace(self, view=view)

    def with_playback(self, playback: PlaybackState) -> "AppContext":
        return replace(self, playback=playback)

    def with_shuffle_history(self, history: ShuffleHistory) -> "AppContext":
        return replace(self, shuffle_history=history)
