"""Tests for restdsl.generator.paths (RestDslGenerator and PathVisitor)."""

from __future__ import annotations

import copy
from typing import Any, Optional

import pytest

from restdsl.emitter import MISSING, RecordingEmitter, SourceEmitter
from restdsl.exceptions import SpecParseError, UnknownParameterLocation
from restdsl.generator import OperationFilter, RestDslGenerator
from restdsl.generator.destinations import DirectToOperationId
from restdsl.models import GeneratorConfig, ParameterLocation, RestConfiguration


def _with_cookie_operation(spec: dict[str, Any]) -> dict[str, Any]:
    broken = copy.deepcopy(spec)
    broken["paths"]["/session"] = {
        "get": {
            "operationId": "getSession",
            "parameters": [
                {"name": "trace", "in": "header", "schema": {"type": "string"}},
                {"name": "sid", "in": "cookie", "schema": {"type": "string"}},
            ],
            "responses": {"200": {"description": "OK"}},
        },
        "delete": {"operationId": "endSession", "responses": {"204": {"description": "Gone"}}},
    }
    return broken


class TestBasePath:

    def test_swagger2_base_path(self, petstore_20_raw: dict[str, Any]) -> None:
        assert RestDslGenerator(petstore_20_raw).base_path() == "/v1"

    def test_openapi3_server_path(self, petstore_30_raw: dict[str, Any]) -> None:
        assert RestDslGenerator(petstore_30_raw).base_path() == "/api/v3"

    @pytest.mark.parametrize(
        "servers",
        [
            None,
            [],
            [{"url": "https://example.com"}],
            [{"url": "https://example.com/"}],
            {"url": "/v1"},
        ],
    )
    def test_openapi3_without_path(self, servers: Any) -> None:  # noqa: ANN401
        document = {"openapi": "3.0.0", "paths": {}}
        if servers is not None:
            document["servers"] = servers
        assert RestDslGenerator(document).base_path() is None

    def test_relative_server_url(self) -> None:
        document = {"openapi": "3.1.0", "servers": [{"url": "/api/"}], "paths": {}}
        assert RestDslGenerator(document).base_path() == "/api"


class TestGenerate:

    def test_swagger2_petstore(self, petstore_20_raw: dict[str, Any]) -> None:
        recorder = RecordingEmitter()
        report = RestDslGenerator(petstore_20_raw).generate(recorder)

        assert recorder.events[0] == ("rest", "/v1")
        assert recorder.values("to") == [
            "direct:listPets",
            "direct:createPet",
            "direct:showPetById",
            "direct:deletePet",
            "direct:uploadFile",
        ]
        assert report.emitted == [
            "listPets", "createPet", "showPetById", "deletePet", "uploadFile"
        ]
        assert report.filtered == []
        assert ParameterLocation.FORM_DATA in recorder.values("type")

    def test_openapi3_petstore(self, petstore_30_raw: dict[str, Any]) -> None:
        recorder = RecordingEmitter()
        report = RestDslGenerator(petstore_30_raw).generate(recorder)

        assert recorder.events[0] == ("rest", "/api/v3")
        assert report.emitted[-1] == "GET /health"
        assert recorder.values("to")[-1] == "direct:health"
        assert ["application/json", "application/xml", "application/json"] in recorder.values(
            "produces"
        )
        # updatePetWithForm expands its form body; createPet falls back to "body".
        names = recorder.values("name")
        assert "body" in names
        assert "status" in names

    def test_version_mismatch_is_detected(self) -> None:
        with pytest.raises(SpecParseError):
            RestDslGenerator({"info": {}, "paths": {}})

    def test_explicit_version_skips_detection(self) -> None:
        recorder = RecordingEmitter()
        RestDslGenerator({"paths": {"/a": {"get": {"operationId": "a"}}}}, version=2).generate(
            recorder
        )
        assert recorder.names() == ["rest", "get", "id", "to"]

    def test_bare_rest_without_base_path(self) -> None:
        recorder = RecordingEmitter()
        RestDslGenerator({"swagger": "2.0", "paths": {}}).generate(recorder)
        assert recorder.events == [("rest", MISSING)]

    def test_filter_is_reported(self, petstore_20_raw: dict[str, Any]) -> None:
        recorder = RecordingEmitter()
        report = RestDslGenerator(petstore_20_raw).with_filter("*Pet,listPets").generate(recorder)
        assert report.emitted == ["listPets", "createPet", "deletePet"]
        assert report.filtered == ["showPetById", "uploadFile"]
        assert recorder.values("id") == ["listPets", "createPet", "deletePet"]

    def test_with_filter_accepts_filter_object(self, petstore_20_raw: dict[str, Any]) -> None:
        generator = RestDslGenerator(petstore_20_raw).with_filter(OperationFilter("uploadFile"))
        assert generator.generate(RecordingEmitter()).emitted == ["uploadFile"]

    def test_custom_destination(self, petstore_20_raw: dict[str, Any]) -> None:
        recorder = RecordingEmitter()
        (
            RestDslGenerator(petstore_20_raw)
            .with_filter("listPets")
            .with_destination_generator(DirectToOperationId("seda:{operation_id}"))
            .generate(recorder)
        )
        assert recorder.values("to") == ["seda:listPets"]

    def test_rest_configuration_block(self, petstore_20_raw: dict[str, Any]) -> None:
        recorder = RecordingEmitter()
        (
            RestDslGenerator(petstore_20_raw)
            .with_filter("none")
            .with_rest_configuration(RestConfiguration(component="servlet", context_path="/api"))
            .generate(recorder)
        )
        assert recorder.events == [
            ("restConfiguration", MISSING),
            ("component", "servlet"),
            ("contextPath", "/api"),
            ("rest", "/v1"),
        ]

    def test_blank_rest_configuration_is_skipped(self, petstore_20_raw: dict[str, Any]) -> None:
        recorder = RecordingEmitter()
        (
            RestDslGenerator(petstore_20_raw)
            .with_filter("none")
            .with_rest_configuration(RestConfiguration(host=""))
            .generate(recorder)
        )
        assert recorder.names() == ["rest"]

    def test_source_output(self, petstore_20_raw: dict[str, Any]) -> None:
        source = SourceEmitter()
        RestDslGenerator(petstore_20_raw).with_filter("deletePet").generate(source)
        text = source.render()
        assert text.startswith('rest("/v1")\n    .delete("/pets/{petId}")\n')
        assert '.type(RestParamType.header)' in text
        assert text.endswith('.to("direct:deletePet");\n')

    def test_from_config(self, petstore_20_raw: dict[str, Any]) -> None:
        config = GeneratorConfig(
            filter="listPets",
            destination="direct:api-{operation_id}",
            rest=RestConfiguration(component="undertow"),
            continue_on_error=True,
        )
        generator = RestDslGenerator.from_config(petstore_20_raw, config)
        assert generator.continue_on_error is True
        recorder = RecordingEmitter()
        generator.generate(recorder)
        assert recorder.values("component") == ["undertow"]
        assert recorder.values("to") == ["direct:api-listPets"]


class TestErrorHandling:

    def test_fail_fast_propagates(self, petstore_30_raw: dict[str, Any]) -> None:
        recorder = RecordingEmitter()
        with pytest.raises(UnknownParameterLocation):
            RestDslGenerator(_with_cookie_operation(petstore_30_raw)).generate(recorder)
        # The partially visited operation stays in the sink.
        assert recorder.values("id")[-1] == "getSession"

    def test_continue_on_error_skips_whole_operation(
        self, petstore_30_raw: dict[str, Any]
    ) -> None:
        recorder = RecordingEmitter()
        report = (
            RestDslGenerator(_with_cookie_operation(petstore_30_raw))
            .with_continue_on_error()
            .generate(recorder)
        )
        assert "getSession" not in recorder.values("id")
        assert "trace" not in recorder.values("name")
        assert "endSession" in report.emitted
        assert report.failed == [
            ("getSession", "Unknown parameter location 'cookie' on parameter 'sid'")
        ]

    def test_filtered_broken_operation_is_not_a_failure(
        self, petstore_30_raw: dict[str, Any]
    ) -> None:
        report = (
            RestDslGenerator(_with_cookie_operation(petstore_30_raw))
            .with_filter("endSession")
            .with_continue_on_error()
            .generate(RecordingEmitter())
        )
        assert report.failed == []
        assert report.emitted == ["endSession"]
        assert "getSession" in report.filtered

    def test_continue_on_error_drops_operation_failing_at_destination(self) -> None:
        document = {
            "swagger": "2.0",
            "paths": {"/": {"get": {}}, "/ok": {"get": {"operationId": "ok"}}},
        }
        recorder = RecordingEmitter()
        report = RestDslGenerator(document).with_continue_on_error().generate(recorder)
        assert recorder.names() == ["rest", "get", "id", "to"]
        assert recorder.events[1] == ("get", "/ok")
        assert report.failed == [("GET /", "Cannot derive a destination name from path '/'")]
        assert report.emitted == ["ok"]

    def test_continue_on_error_consults_filter_once_per_operation(
        self, petstore_30_raw: dict[str, Any]
    ) -> None:
        seen: list[Optional[str]] = []

        class CountingFilter(OperationFilter):
            def accept(self, operation_id: Optional[str]) -> bool:
                seen.append(operation_id)
                return super().accept(operation_id)

        (
            RestDslGenerator(petstore_30_raw)
            .with_filter(CountingFilter())
            .with_continue_on_error()
            .generate(RecordingEmitter())
        )
        assert seen == [
            "listPets", "createPet", "showPetById", "updatePetWithForm", "deletePet", None
        ]
