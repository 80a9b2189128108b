"""Shared test fixtures for the eslog test suite."""

import json
import os
from unittest.mock import patch

import pytest

from eslog.events import EventLevel
from eslog.lib.log_lib import channels as _channels_mod
from eslog.lib.log_lib import manager as _manager_mod
from eslog.provider import CollectingListener
from eslog import source_logger as _source_logger_mod
from eslog.source_logger import EventSourceLogger, create_logging_source


# ---------------------------------------------------------------------------
# Sample manifests
# ---------------------------------------------------------------------------
KEYWORDS_MANIFEST = """\
<instrumentationManifest xmlns="http://schemas.microsoft.com/win/2004/08/events">
 <instrumentation xmlns:xs="http://www.w3.org/2001/XMLSchema" xmlns:win="http://manifests.microsoft.com/win/2004/08/windows/events">
  <events>
   <provider name="KeywordsEventSource" guid="{0cd4b3b1-8bd3-5d02-4b55-6b0e2ea0e2c5}" symbol="KeywordsEventSource">
    <tasks/>
    <opcodes/>
    <keywords>
     <keyword name="FirstKeyword" message="$(string.keyword_FirstKeyword)" mask="0x1"/>
     <keyword name="SecondKeyword" message="$(string.keyword_SecondKeyword)" mask="0x2"/>
     <keyword name="ThirdKeyword" message="$(string.keyword_ThirdKeyword)" mask="0x4"/>
     <keyword name="FourthKeyword" message="$(string.keyword_FourthKeyword)" mask="0x8"/>
    </keywords>
    <events>
     <event value="1" version="0" level="win:Informational" symbol="OneKeywordExample" keywords="FirstKeyword" task="OneKeywordExample" template="OneKeywordExampleArgs"/>
     <event value="2" version="0" level="win:Informational" symbol="TwoKeywordExample" keywords="SecondKeyword ThirdKeyword" task="TwoKeywordExample" template="TwoKeywordExampleArgs"/>
     <event value="3" version="0" level="win:Informational" symbol="ThreeKeywordExample" keywords="SecondKeyword ThirdKeyword FourthKeyword" task="ThreeKeywordExample" template="ThreeKeywordExampleArgs"/>
    </events>
    <templates/>
   </provider>
  </events>
 </instrumentation>
</instrumentationManifest>
"""

LOGGING_MANIFEST = """\
<instrumentationManifest>
  <instrumentation>
    <events>
      <provider name="P">
        <events>
          <event value="11" symbol="Debug" level="win:Verbose" channel="19" keywords="Diagnostics"/>
          <event value="12" symbol="DebugException" level="win:Verbose" channel="19" keywords="Diagnostics Failures"/>
          <event value="21" symbol="Info" level="win:Informational" channel="17"/>
          <event value="22" symbol="InfoException" level="win:Informational" channel="17" keywords="Failures"/>
          <event value="31" symbol="Warn" level="win:Warning" channel="17"/>
          <event value="32" symbol="WarnException" level="win:Warning" channel="17" keywords="Failures"/>
          <event value="41" symbol="Error" level="win:Error" channel="17"/>
          <event value="42" symbol="ErrorException" level="win:Error" channel="17" keywords="Failures"/>
          <event value="51" symbol="Fatal" level="win:Critical" channel="17"/>
          <event value="52" symbol="FatalException" level="win:Critical" channel="17" keywords="Failures"/>
        </events>
        <keywords>
          <keyword name="Diagnostics" mask="0x1"/>
          <keyword name="Failures" mask="0x2"/>
        </keywords>
      </provider>
    </events>
  </instrumentation>
</instrumentationManifest>
"""


@pytest.fixture
def keywords_manifest():
    return KEYWORDS_MANIFEST


@pytest.fixture
def logging_manifest():
    """Manifest for provider "P" declaring all ten logging events."""
    return LOGGING_MANIFEST


# ---------------------------------------------------------------------------
# Provider / logger fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def listener():
    """A listener that accepts everything and keeps the records."""
    return CollectingListener(level=EventLevel.VERBOSE)


@pytest.fixture
def source():
    """The built-in logging provider (generated manifest)."""
    return create_logging_source()


@pytest.fixture
def esl(source, listener):
    """EventSourceLogger over the built-in provider with a listener attached."""
    logger = EventSourceLogger(source)
    source.add_listener(listener)
    return logger


# ---------------------------------------------------------------------------
# Global state
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _reset_singletons():
    """Restore log_lib channels and the output/logger singletons after each test."""
    saved_channels = (
        _channels_mod.KNOWN_CHANNELS,
        _channels_mod.CHANNEL_DESCRIPTIONS,
        _channels_mod.OPT_IN_CHANNELS,
    )
    saved_manager = _manager_mod._manager
    saved_logger = _source_logger_mod._default_logger
    yield
    (_channels_mod.KNOWN_CHANNELS,
     _channels_mod.CHANNEL_DESCRIPTIONS,
     _channels_mod.OPT_IN_CHANNELS) = saved_channels
    _manager_mod._manager = saved_manager
    _source_logger_mod._default_logger = saved_logger


@pytest.fixture
def tmp_config_home(tmp_path):
    """Temporary home directory for ~/.eslog/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """A working directory with no .eslog.json, used as cwd."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def manifest_file(project_dir):
    """LOGGING_MANIFEST written to disk."""
    path = project_dir / "app.man"
    path.write_text(LOGGING_MANIFEST, encoding="utf-8")
    return path


@pytest.fixture
def sample_global_config(tmp_config_home):
    config_dir = tmp_config_home / ".eslog"
    config_dir.mkdir()
    config = {"provider": "GlobalProvider"}
    path = config_dir / "config.json"
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path, config
