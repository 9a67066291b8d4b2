"""Tests for node description, credential and request models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.models.credential_models import EDDIE_API_CREDENTIAL, EddieCredentials
from src.models.node_description import EDDIE_SURF_NODE
from src.models.request_models import (
    AdvancedOptions,
    HttpRequestDescriptor,
    ItemResult,
    Operation,
)


class TestNodeDescription:
    """Test the static Eddie.surf node description."""

    def test_identity(self):
        assert EDDIE_SURF_NODE.name == "eddieSurf"
        assert EDDIE_SURF_NODE.display_name == "Eddie.surf"
        assert EDDIE_SURF_NODE.version == 1
        assert EDDIE_SURF_NODE.credentials == ["eddieApi"]

    def test_operations(self):
        assert EDDIE_SURF_NODE.operations() == [op.value for op in Operation]

    def test_parameter_names(self):
        names = [prop.name for prop in EDDIE_SURF_NODE.properties]
        assert names == [
            "operation",
            "urls",
            "context",
            "jsonSchema",
            "query",
            "advancedOptions",
            "jobType",
            "jobId",
            "siteId",
        ]

    def test_parameter_types(self):
        assert EDDIE_SURF_NODE.get_property("context").type == "json"
        assert EDDIE_SURF_NODE.get_property("advancedOptions").type == "collection"
        assert EDDIE_SURF_NODE.get_property("jobType").type == "options"

    def test_advanced_option_members(self):
        options = EDDIE_SURF_NODE.get_property("advancedOptions")
        assert [m.name for m in options.members] == [
            "maxDepth",
            "maxPages",
            "maxResults",
            "websiteOnly",
            "skipDuplicateDomains",
            "timeoutPerPage",
            "callbackUrl",
            "callbackMode",
            "rules",
            "includeTechnical",
            "mock",
        ]
        assert options.get_member("maxDepth").default == 3
        assert options.get_member("maxResults").show_for_operations == ("smartSearch",)
        assert [c.value for c in options.get_member("callbackMode").choices] == [
            "once",
            "multi",
        ]

    def test_unknown_member(self):
        with pytest.raises(KeyError):
            EDDIE_SURF_NODE.get_property("advancedOptions").get_member("depth")

    def test_site_id_only_for_status(self):
        assert EDDIE_SURF_NODE.get_property("siteId").show_for_operations == ("getStatus",)

    def test_resolve_parameter_prefers_item_value(self):
        assert EDDIE_SURF_NODE.resolve_parameter("jobType", {"jobType": "smart-search"}) == (
            "smart-search"
        )

    def test_resolve_parameter_falls_back_to_default(self):
        assert EDDIE_SURF_NODE.resolve_parameter("operation", {}) == "crawl"
        assert EDDIE_SURF_NODE.resolve_parameter("context", {}) == "{}"
        assert EDDIE_SURF_NODE.resolve_parameter("advancedOptions", {}) == {}

    def test_resolve_unknown_parameter(self):
        with pytest.raises(KeyError, match="Unknown node parameter"):
            EDDIE_SURF_NODE.resolve_parameter("limit", {"limit": 3})


class TestCredentials:
    """Test EddieCredentials and the credential descriptor."""

    def test_defaults(self):
        credentials = EddieCredentials(api_key="key")
        assert credentials.base_url == "https://api.eddie.surf"

    def test_camel_case_aliases(self):
        credentials = EddieCredentials(apiKey="key", baseUrl="https://x.test/")
        assert credentials.base_url == "https://x.test"

    def test_blank_base_url_uses_default(self):
        assert EddieCredentials(api_key="k", base_url="  ").base_url == "https://api.eddie.surf"

    @pytest.mark.parametrize("api_key", ["", "   "])
    def test_blank_api_key_rejected(self, api_key):
        with pytest.raises(PydanticValidationError):
            EddieCredentials(api_key=api_key)

    def test_api_key_hidden_in_repr(self):
        assert "secret-value" not in repr(EddieCredentials(api_key="secret-value"))

    def test_authentication_headers(self):
        headers = EDDIE_API_CREDENTIAL.authentication_headers(
            EddieCredentials(api_key="secret-value")
        )
        assert headers == {"X-API-Key": "secret-value"}

    def test_test_request(self):
        assert EDDIE_API_CREDENTIAL.test_request().to_dict() == {
            "method": "GET",
            "path": "/health",
        }

    def test_descriptor_properties(self):
        api_key, base_url = EDDIE_API_CREDENTIAL.properties
        assert api_key.name == "apiKey"
        assert api_key.required and api_key.secret
        assert base_url.default == "https://api.eddie.surf"


class TestRequestModels:
    """Test request-scoped models."""

    def test_advanced_options_absent_by_default(self):
        options = AdvancedOptions()
        assert options.max_depth is None
        assert options.mock is None

    def test_advanced_options_frozen(self):
        options = AdvancedOptions(max_depth=2)
        with pytest.raises(PydanticValidationError):
            options.max_depth = 3

    def test_descriptor_rejects_unknown_method(self):
        with pytest.raises(PydanticValidationError):
            HttpRequestDescriptor(method="DELETE", path="/crawl/abc")

    def test_item_result_error_flag(self):
        assert not ItemResult(json={"error": "from api"}, paired_item=0).is_error
        assert ItemResult(json={"error": "x"}, paired_item=0, error="x").is_error
