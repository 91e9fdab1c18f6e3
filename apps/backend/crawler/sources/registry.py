"""
Source registry.

Registration order is run order: the orchestrator scrapes sources one
after another in the order they were registered.
"""
import logging
from typing import Dict, Iterable, List, Optional

from core.net import PageFetcher

from .base import NoticeSource

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Ordered registry of source adapters"""

    def __init__(self):
        self._sources: List[NoticeSource] = []
        self._sources_by_name: Dict[str, NoticeSource] = {}

    def register(self, source: NoticeSource):
        """Register a source; a source with the same name is replaced in place"""
        existing = self._sources_by_name.get(source.name)
        if existing is not None:
            logger.warning(f"Source {source.name} already registered, replacing")
            self._sources[self._sources.index(existing)] = source
        else:
            self._sources.append(source)
        self._sources_by_name[source.name] = source
        logger.debug(f"Registered source: {source.name}")

    def get_source(self, name: str) -> Optional[NoticeSource]:
        return self._sources_by_name.get(name)

    def all(self) -> List[NoticeSource]:
        return list(self._sources)

    def select(self, names: Optional[Iterable[str]] = None) -> List[NoticeSource]:
        """
        Sources to run, in registration order.

        Raises:
            KeyError: if a requested name is not registered
        """
        if not names:
            return self.all()
        wanted = set(names)
        unknown = wanted - set(self._sources_by_name)
        if unknown:
            raise KeyError(f"Unknown source(s): {', '.join(sorted(unknown))}")
        return [source for source in self._sources if source.name in wanted]

    def list_sources(self) -> List[Dict]:
        """List all registered sources"""
        return [
            {
                'name': source.name,
                'source_name': source.source_name,
                'source_url': source.source_url,
                'category': source.category,
                'state': source.state,
            }
            for source in self._sources
        ]

    def __len__(self):
        return len(self._sources)


def build_default_registry(fetcher: PageFetcher) -> SourceRegistry:
    """Registry with every built-in source, in run order"""
    from .employment_news import EmploymentNewsSource
    from .ibps import IBPSSource
    from .medical import MedicalSource
    from .psu import PSUSource
    from .rrb import RRBSource
    from .sbi import SBISource
    from .ssc import SSCSource
    from .state_psc import StatePSCSource
    from .tnpsc import TNPSCSource
    from .upsc import UPSCSource

    registry = SourceRegistry()
    for source_class in (
        EmploymentNewsSource,
        IBPSSource,
        MedicalSource,
        PSUSource,
        RRBSource,
        SBISource,
        SSCSource,
        StatePSCSource,
        TNPSCSource,
        UPSCSource,
    ):
        registry.register(source_class(fetcher))
    logger.info(f"[sources] Registered {len(registry)} sources")
    return registry
