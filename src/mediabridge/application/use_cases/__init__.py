from .resolve_episode_streams import ResolveEpisodeStreams

__all__ = ["ResolveEpisodeStreams"]
