"""
Event manifest reading and writing.

A manifest is the self-describing XML document of an event provider:

    <instrumentationManifest xmlns="http://schemas.microsoft.com/win/2004/08/events">
      <instrumentation>
        <events>
          <provider name="...">
            <events>
              <event value="ID" symbol="Name" level="win:Level" channel="N" keywords="Kw1 Kw2"/>
            </events>
            <keywords>
              <keyword name="Kw1" mask="0x1"/>
            </keywords>
          </provider>
        </events>
      </instrumentation>
    </instrumentationManifest>

Elements are matched by local name, so manifests with or without the
events namespace both resolve. Malformed <event>/<keyword> entries are
skipped one at a time and reported on the 'manifest' channel at DEBUG.
Only an ill-formed document raises (ManifestError).
"""

import string
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Union

from eslog.events import (
    EventDefinition, EventLevel, EventChannel, KEYWORDS_ALL, KEYWORDS_NONE,
    decode_channel, decode_level, level_token,
)
from eslog.lib.log_lib import get_output, trace
from eslog.lib.log_lib.levels import DEBUG

EVENTS_NAMESPACE = 'http://schemas.microsoft.com/win/2004/08/events'

ManifestSource = Union[str, ET.Element]


class ManifestError(ValueError):
    """The manifest text is empty or not well-formed XML."""


@dataclass(frozen=True)
class EventAttribute:
    """Metadata resolved for one <event> element."""
    event_id: int
    level: EventLevel = EventLevel.INFORMATIONAL
    channel: int = EventChannel.NONE
    keywords: int = KEYWORDS_NONE


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------
def parse_manifest(text: Optional[str]) -> ET.Element:
    """Parse manifest text into its root element.

    Raises:
        ManifestError: text is None, blank, or not well-formed XML
    """
    if text is None or not text.strip():
        raise ManifestError("manifest is empty")
    try:
        return ET.fromstring(text)
    except ET.ParseError as e:
        raise ManifestError(f"manifest is not well-formed XML: {e}") from e


def _as_root(manifest: ManifestSource) -> ET.Element:
    if isinstance(manifest, str):
        return parse_manifest(manifest)
    return manifest


def _local_name(tag: str) -> str:
    return tag.rsplit('}', 1)[-1]


def find_provider(root: ET.Element, name: Optional[str] = None) -> Optional[ET.Element]:
    """Return the first <provider> element called ``name``.

    With name=None the first provider in document order is returned.
    """
    candidates = [root] if _local_name(root.tag) == 'provider' else []
    candidates.extend(root.iterfind('.//{*}provider'))
    for provider in candidates:
        if name is None or provider.get('name') == name:
            return provider
    return None


def provider_names(manifest: ManifestSource) -> List[str]:
    """Names of every provider described by the manifest."""
    root = _as_root(manifest)
    return [p.get('name') for p in root.iterfind('.//{*}provider') if p.get('name')]


def parse_mask(text: Optional[str]) -> Optional[int]:
    """Parse a "0x..." keyword mask. None unless well-formed, non-zero, 64-bit."""
    if not text or not text.startswith('0x'):
        return None
    digits = text[2:]
    if not digits or any(c not in string.hexdigits for c in digits):
        return None
    value = int(digits, 16)
    if value == 0 or value > KEYWORDS_ALL:
        return None
    return value


def parse_keywords(text: Optional[str], keyword_table: Mapping[str, int]) -> int:
    """OR together the masks of whitespace-separated keyword names.

    Names missing from the table contribute nothing.
    """
    mask = KEYWORDS_NONE
    if not text:
        return mask
    for token in text.split():
        mask |= keyword_table.get(token, KEYWORDS_NONE)
    return mask


def _parse_event_id(text: Optional[str]) -> Optional[int]:
    if text is None:
        return None
    try:
        event_id = int(text.strip())
    except ValueError:
        return None
    return event_id if event_id > 0 else None


# ---------------------------------------------------------------------------
# Keyword table and event resolution
# ---------------------------------------------------------------------------
def _keywords_of(provider: ET.Element) -> Dict[str, int]:
    out = get_output()
    table: Dict[str, int] = {}
    for node in provider.iterfind('{*}keywords/{*}keyword'):
        name = node.get('name')
        mask = parse_mask(node.get('mask'))
        if not name or not name.strip() or mask is None:
            out.emit(DEBUG, "  [manifest] skipped keyword name={name!r} mask={mask!r}",
                     channel='manifest', name=name, mask=node.get('mask'))
            continue
        # Duplicate names: last seen wins
        table[name] = mask
    return table


@trace
def build_keyword_table(manifest: ManifestSource,
                        provider_name: Optional[str] = None) -> Dict[str, int]:
    """Build the keyword name -> mask table for one provider.

    Args:
        manifest: Manifest text or an already parsed root element
        provider_name: Provider to read; None means the first provider

    Returns:
        Dict of keyword masks. Empty when the provider or its <keywords>
        section is missing.
    """
    provider = find_provider(_as_root(manifest), provider_name)
    if provider is None:
        get_output().emit(DEBUG, "  [manifest] no provider named {name!r}",
                          channel='manifest', name=provider_name)
        return {}
    return _keywords_of(provider)


@trace
def resolve_events(manifest: ManifestSource,
                   provider_name: Optional[str] = None,
                   keyword_table: Optional[Mapping[str, int]] = None
                   ) -> Dict[str, EventAttribute]:
    """Resolve every usable <event> of a provider, keyed by symbol.

    An event needs a positive integer ``value`` and a non-blank
    ``symbol``; anything else is skipped. Level and channel fall back to
    Informational / None. Keyword names are looked up in
    ``keyword_table`` (built from the same provider when omitted).
    A symbol that appears twice keeps its last definition.
    """
    out = get_output()
    provider = find_provider(_as_root(manifest), provider_name)
    if provider is None:
        out.emit(DEBUG, "  [manifest] no provider named {name!r}",
                 channel='manifest', name=provider_name)
        return {}
    if keyword_table is None:
        keyword_table = _keywords_of(provider)

    resolved: Dict[str, EventAttribute] = {}
    for node in provider.iterfind('{*}events/{*}event'):
        event_id = _parse_event_id(node.get('value'))
        symbol = node.get('symbol')
        if event_id is None or not symbol or not symbol.strip():
            out.emit(DEBUG, "  [manifest] skipped event value={value!r} symbol={symbol!r}",
                     channel='manifest', value=node.get('value'), symbol=symbol)
            continue
        resolved[symbol] = EventAttribute(
            event_id=event_id,
            level=decode_level(node.get('level')),
            channel=decode_channel(node.get('channel')),
            keywords=parse_keywords(node.get('keywords'), keyword_table),
        )
    return resolved


# ---------------------------------------------------------------------------
# Manifest generation
# ---------------------------------------------------------------------------
def keyword_names(mask: int, keywords: Mapping[str, int]) -> List[str]:
    """Names of declared keywords whose whole mask is set in ``mask``."""
    return [name for name, value in keywords.items()
            if value and (mask & value) == value]


def generate_manifest(provider_name: str,
                      events: Iterable[EventDefinition],
                      keywords: Optional[Mapping[str, int]] = None) -> str:
    """Write the manifest for a provider from its static declarations.

    The output parses back through resolve_events() to the same ids,
    levels, channels and keyword masks.
    """
    keywords = dict(keywords or {})

    root = ET.Element('instrumentationManifest', {'xmlns': EVENTS_NAMESPACE})
    instrumentation = ET.SubElement(root, 'instrumentation')
    provider_list = ET.SubElement(instrumentation, 'events')
    provider = ET.SubElement(provider_list, 'provider', {
        'name': provider_name,
        'symbol': provider_name.replace('-', '_').replace('.', '_'),
    })

    events_el = ET.SubElement(provider, 'events')
    for definition in sorted(events, key=lambda d: d.event_id):
        attrs = {
            'value': str(definition.event_id),
            'version': '0',
            'level': level_token(definition.level),
            'symbol': definition.symbol,
        }
        if definition.channel:
            attrs['channel'] = str(int(definition.channel))
        names = keyword_names(definition.keywords, keywords)
        if names:
            attrs['keywords'] = ' '.join(names)
        ET.SubElement(events_el, 'event', attrs)

    if keywords:
        keywords_el = ET.SubElement(provider, 'keywords')
        for name, mask in sorted(keywords.items(), key=lambda item: item[1]):
            ET.SubElement(keywords_el, 'keyword', {
                'name': name,
                'mask': f'0x{mask:x}',
            })

    ET.indent(root)
    return ET.tostring(root, encoding='unicode')
