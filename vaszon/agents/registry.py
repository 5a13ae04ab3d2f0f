"""
Agent Registry for Vászon.

This module defines the registry of the AI agents used by the canvas (text
extraction, summary, block suggestions) together with their prompts. Prompts
can be overridden from the ``agents.definitions`` configuration section.
"""

import logging
from typing import Any, Dict, List, Optional
from dataclasses import dataclass


@dataclass
class AgentConfig:
    """
    Configuration for an AI agent.
    """
    name: str
    description: str
    system_prompt: str
    user_prompt_template: str
    # Per-request HTTP timeout in seconds; None keeps the client timeout
    timeout: Optional[float] = None

    def render(self, **kwargs) -> str:
        """
        Render the user prompt template.

        Raises:
            ValueError: If a template variable is missing
        """
        try:
            return self.user_prompt_template.format(**kwargs)
        except KeyError as e:
            raise ValueError(f"Missing template variable {e} for agent '{self.name}'")


class AgentRegistry:
    """
    Registry of all available AI agents and their configurations.
    """

    def __init__(self, definitions: Optional[Dict[str, Any]] = None):
        """
        Initialize the agent registry with default agents.

        Args:
            definitions: Optional overrides keyed by agent name, as found in
                the ``agents.definitions`` configuration section
        """
        self._agents: Dict[str, AgentConfig] = {}
        self._register_default_agents()
        if definitions:
            self._load_definitions(definitions)

    def _register_default_agents(self):
        """Register the default agents used by Vászon."""

        # Extractor Agent - turns PDF/Word documents into plain text
        self.register_agent(AgentConfig(
            name="extractor",
            description="Extracts the plain text of an attached document",
            system_prompt="""Dokumentumfeldolgozó asszisztens vagy. A feladatod, hogy a csatolt dokumentum teljes szöveges tartalmát kinyerd.

Szabályok:
1. Add vissza a dokumentum szövegét a lehető leghűségesebben, az eredeti nyelven
2. Tartsd meg a bekezdéseket és a felsorolásokat
3. Ne fűzz hozzá magyarázatot, összefoglalót vagy megjegyzést""",
            user_prompt_template="Nyerd ki a csatolt dokumentum ({mime_type}) teljes szövegét."
        ))

        # Summarizer Agent - writes the business model summary
        self.register_agent(AgentConfig(
            name="summarizer",
            description="Summarizes the business concept and the filled canvas",
            system_prompt="""Tapasztalt üzleti tanácsadó vagy. Egy üzleti modell vászon tartalmát elemzed.

Készíts tömör, jól strukturált összefoglalót magyarul, amely tartalmazza:
1. Az üzleti modell lényegét néhány mondatban
2. A modell erősségeit
3. A kockázatokat és hiányosságokat
4. Konkrét javaslatokat a következő lépésekre""",
            user_prompt_template="""ÜZLETI KONCEPCIÓ:
{full_concept}

ÜZLETI MODELL VÁSZON:
{canvas_digest}

Készítsd el az összefoglalót."""
        ))

        # Suggester Agent - proposes items for one block
        self.register_agent(AgentConfig(
            name="suggester",
            description="Proposes candidate items for one canvas block",
            system_prompt="""Üzleti modell szakértő vagy. Egy üzleti modell vászon egyetlen blokkjához javasolsz tartalmat.

Adj 5-8 rövid, konkrét, egymástól különböző javaslatot magyarul.
Kimenet: kizárólag egy JSON tömb szövegekkel, magyarázat nélkül.
Példa: ["Első javaslat", "Második javaslat"]""",
            user_prompt_template="""BLOKK: {block_title}
A BLOKK KÉRDÉSE: {block_description}

ÜZLETI KONCEPCIÓ:
{full_concept}

Adj javaslatokat ehhez a blokkhoz."""
        ))

    def _load_definitions(self, definitions: Dict[str, Any]) -> None:
        """Override or add agents from configuration."""
        for agent_name, agent_config in definitions.items():
            try:
                base = self._agents.get(agent_name)
                required_fields = [] if base else ['description', 'system_prompt', 'user_prompt_template']
                for field in required_fields:
                    if field not in agent_config:
                        raise ValueError(f"Missing required field '{field}' in agent '{agent_name}'")

                self.register_agent(AgentConfig(
                    name=agent_name,
                    description=agent_config.get('description', base.description if base else ""),
                    system_prompt=agent_config.get('system_prompt', base.system_prompt if base else ""),
                    user_prompt_template=agent_config.get(
                        'user_prompt_template', base.user_prompt_template if base else ""
                    ),
                    timeout=agent_config.get('timeout', base.timeout if base else None)
                ))
                logging.info(f"Loaded agent definition: {agent_name}")

            except Exception as e:
                logging.error(f"Failed to load agent definition '{agent_name}': {e}")

    def register_agent(self, config: AgentConfig) -> None:
        """
        Register a new agent configuration.

        Args:
            config: The agent configuration to register
        """
        self._agents[config.name] = config

    def get_agent(self, name: str) -> Optional[AgentConfig]:
        """
        Get an agent configuration by name.

        Args:
            name: The name of the agent

        Returns:
            The agent configuration, or None if not found
        """
        return self._agents.get(name)

    def require_agent(self, name: str) -> AgentConfig:
        agent = self.get_agent(name)
        if not agent:
            raise ValueError(f"Agent '{name}' not found in registry")
        return agent

    def list_agents(self) -> List[str]:
        """
        Get a list of all registered agent names.

        Returns:
            List of agent names
        """
        return list(self._agents.keys())
