"""
Position Template Service - Resolves per-team position counts

Looks up the configured template for a team size and falls back to the
one-third heuristic when none is configured or the configured one does not
fill the team.
"""

import logging
from typing import Dict, Mapping, Optional, Tuple, Union

from models.balance import PositionTemplate

logger = logging.getLogger(__name__)

TemplateLike = Union[PositionTemplate, Mapping[str, int]]

# Sources reported in balance diagnostics
SOURCE_CONFIGURED = 'configured'
SOURCE_FALLBACK = 'fallback'


class PositionTemplateService:
    """Resolves which template applies to a given team size."""

    def __init__(self, templates: Optional[Mapping[int, TemplateLike]] = None):
        """
        Args:
            templates: Known templates keyed by team size, either
                PositionTemplate instances or dicts with defenders,
                midfielders and attackers
        """
        self.templates: Dict[int, PositionTemplate] = {}
        for size, template in (templates or {}).items():
            self.templates[int(size)] = self.coerce(template)

    @staticmethod
    def coerce(template: TemplateLike) -> PositionTemplate:
        """Build a PositionTemplate from a template or a plain mapping."""
        if isinstance(template, PositionTemplate):
            return template
        return PositionTemplate(
            defenders=int(template['defenders']),
            midfielders=int(template['midfielders']),
            attackers=int(template['attackers'])
        )

    def resolve(self, team_size: int, template: Optional[TemplateLike] = None) -> Tuple[PositionTemplate, str]:
        """
        Pick the template for ``team_size``.

        An explicit ``template`` wins over the configured table. A template
        whose counts do not add up to the team size is ignored.

        Returns:
            Tuple of (template, source) where source is 'configured' or
            'fallback'
        """
        candidate = self.coerce(template) if template is not None else self.templates.get(team_size)

        if candidate is not None:
            if candidate.team_size == team_size:
                return candidate, SOURCE_CONFIGURED
            logger.warning(
                f"Template {candidate.defenders}/{candidate.midfielders}/{candidate.attackers} "
                f"does not sum to team size {team_size}, using fallback"
            )
        else:
            logger.warning(f"No team size template found for {team_size}v{team_size}, using defaults")

        return PositionTemplate.fallback(team_size), SOURCE_FALLBACK
