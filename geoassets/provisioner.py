# ==============================================================================
# GEOASSETS - ASSET PROVISIONER
# ==============================================================================
# Startup step that brings the extracted resources in line with the bundle.
#
# For each managed resource, in order:
#   1. Snapshot its on-disk state (VersionStore.inspect)
#   2. Decide whether to extract (should_extract)
#   3. Extract and stamp it (AssetExtractor.extract)
#
# A failure on one resource is logged and the next one is still attempted.
# Provisioning is best effort: the proxy engine can run on stale or missing
# data, so nothing here raises to the application.
#
# Usage:
#   settings = Config().to_settings()
#   with open_bundle(settings.bundle_path, settings.bundle_prefix) as bundle:
#       AssetProvisioner(settings, bundle).provision_all()
# ==============================================================================

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

from .core.config import AssetSettings
from .core.errors import AssetError
from .core.resources import RESOURCES, ResourceDescriptor, get_resource
from .core.version_store import VersionStore
from .extractors.asset_extractor import AssetExtractor
from .extractors.bundle import AssetBundleReader
from .extractors.decision import should_extract


logger = logging.getLogger(__name__)

# A channel preference, or a provider evaluated once per run
OfficialPreference = Union[bool, Callable[[], bool], None]


class OutcomeStatus(Enum):
    EXTRACTED = "extracted"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ExtractionOutcome:
    """
    Result of provisioning a single resource.

    Attributes:
        resource: Resource that was provisioned
        status:   What happened
        path:     Extracted file path, when extracted
        error:    The failure, when failed
    """
    resource: ResourceDescriptor
    status: OutcomeStatus
    path: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status is not OutcomeStatus.FAILED


class AssetProvisioner:
    """
    Provisions the fixed resource set from an asset bundle.

    Attributes:
        settings:      Immutable configuration snapshot
        bundle:        Bundle the resources come from
        version_store: On-disk marker access
        extractor:     Performs the actual extraction
        last_outcomes: Outcomes of the most recent provision_all() run
    """

    def __init__(self, settings: AssetSettings, bundle: AssetBundleReader,
                 version_store: Optional[VersionStore] = None):
        self.settings = settings
        self.bundle = bundle
        self.version_store = version_store or VersionStore()
        self.extractor = AssetExtractor(bundle, self.version_store)
        self.last_outcomes: List[ExtractionOutcome] = []

    def _use_official(self, use_official: OfficialPreference) -> bool:
        if use_official is None:
            return self.settings.use_official_assets
        if callable(use_official):
            return bool(use_official())
        return bool(use_official)

    # -------------------------------------------------------------------------
    # SINGLE RESOURCE
    # -------------------------------------------------------------------------

    def _provision(self, resource: ResourceDescriptor, force: bool,
                   use_official: bool) -> ExtractionOutcome:
        directory = self.settings.directory_for(resource.replaceable)
        state = self.version_store.inspect(resource, directory)

        decision = should_extract(
            resource, state, use_official, force,
            lambda: self.extractor.load_bundle_version(resource),
        )
        if not decision:
            logger.debug("%s is up to date in %s", resource.name, directory)
            return ExtractionOutcome(resource, OutcomeStatus.SKIPPED)

        # If the extraction below then fails, the next run finds the file
        # without a marker and keeps it until a forced refresh
        if decision.discard_marker:
            logger.debug("Discarding unreadable marker: %s", state.marker_error)
            self.version_store.remove(resource, directory)

        path = self.extractor.extract(resource, directory, decision.bundle_version)
        logger.info("Extracted %s to %s", resource.name, directory)
        return ExtractionOutcome(resource, OutcomeStatus.EXTRACTED, path=path)

    def provision(self, name: str, force: bool = False,
                  use_official: OfficialPreference = None) -> ExtractionOutcome:
        """
        Provision one resource by name, raising on failure.

        Args:
            name:         Resource filename (e.g. "geoip.dat")
            force:        Extract even if the versions match
            use_official: Channel preference; defaults to the settings

        Raises:
            KeyError:   If the name is not a managed resource
            AssetError: If the bundle or extraction fails
            OSError:    If a stale marker can't be removed
        """
        return self._provision(get_resource(name), force,
                               self._use_official(use_official))

    # -------------------------------------------------------------------------
    # ALL RESOURCES
    # -------------------------------------------------------------------------

    def provision_all(self, use_official: OfficialPreference = None):
        """
        Provision every managed resource, never raising.

        Args:
            use_official: Channel preference (bool or zero-argument callable,
                          evaluated once); defaults to the settings
        """
        self.last_outcomes = []

        if not self.settings.provisioning_enabled:
            logger.debug("Asset provisioning disabled")
            return

        official = self._use_official(use_official)

        for resource in RESOURCES:
            try:
                outcome = self._provision(resource, False, official)
            except (AssetError, OSError) as e:
                logger.warning("Extract %s failed: %s", resource.name, e)
                outcome = ExtractionOutcome(resource, OutcomeStatus.FAILED, error=e)
            self.last_outcomes.append(outcome)
