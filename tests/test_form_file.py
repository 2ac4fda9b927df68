import pytest

from openapi_helpers.document.base import Operation
from openapi_helpers.document.metadata import OperationFilterContext, ParameterDescriptor
from openapi_helpers.errors import NotFoundError
from openapi_helpers.filters.form_file import MULTIPART_FORM_DATA, FormFileFilter, file_schema
from openapi_helpers.lookup import operation_parameter


def _upload_op(*names: str) -> Operation:
    params = [{"name": n, "in": "query", "required": True, "schema": {"type": "object"}} for n in names]
    params.append({"name": "folder", "in": "query", "schema": {"type": "string"}})
    return Operation(parameters=params, responses={"200": {"description": "OK"}})


def _ctx(*descriptors: ParameterDescriptor) -> OperationFilterContext:
    return OperationFilterContext(method="POST", path="/files", parameters=list(descriptors))


def _file(name: str, **kwargs) -> ParameterDescriptor:
    return ParameterDescriptor(name=name, kind="file", is_file_upload=True, **kwargs)


class TestFileSchema:
    def test_single_file(self):
        s = file_schema(_file("file"))
        assert (s.type, s.format) == ("string", "binary")

    def test_file_collection(self):
        s = file_schema(_file("files", is_collection=True))
        assert s.type == "array"
        assert (s.items.type, s.items.format) == ("string", "binary")


class TestFormFileFilter:
    def test_single_file_becomes_body_schema(self):
        op = _upload_op("file")
        FormFileFilter().apply(op, _ctx(_file("file"), ParameterDescriptor(name="folder", required=False)))

        assert [p.name for p in op.parameters] == ["folder"]
        schema = op.request_body.content[MULTIPART_FORM_DATA].schema_
        assert (schema.type, schema.format) == ("string", "binary")
        assert schema.properties is None
        assert op.request_body.required is True

    def test_file_parameter_no_longer_found(self):
        op = _upload_op("file")
        FormFileFilter().apply(op, _ctx(_file("file")))
        with pytest.raises(NotFoundError):
            operation_parameter(op, "file")

    def test_file_collection_becomes_array(self):
        op = _upload_op("files")
        FormFileFilter().apply(op, _ctx(_file("files", is_collection=True)))
        schema = op.request_body.content[MULTIPART_FORM_DATA].schema_
        assert schema.type == "array"
        assert schema.items.format == "binary"

    def test_several_files_become_object_properties(self):
        op = _upload_op("avatar", "attachments")
        FormFileFilter().apply(op, _ctx(
            _file("avatar"),
            _file("attachments", is_collection=True, required=False),
        ))
        schema = op.request_body.content[MULTIPART_FORM_DATA].schema_
        assert schema.type == "object"
        assert schema.properties["avatar"].format == "binary"
        assert schema.properties["attachments"].type == "array"
        assert schema.required == ["avatar"]
        assert [p.name for p in op.parameters] == ["folder"]

    def test_merges_into_existing_form_object(self):
        op = Operation(
            parameters=[{"name": "file", "in": "query", "schema": {"type": "object"}}],
            requestBody={"content": {MULTIPART_FORM_DATA: {"schema": {
                "type": "object",
                "properties": {"title": {"type": "string"}, "file": {"type": "object"}},
                "required": ["title"],
            }}}},
        )
        FormFileFilter().apply(op, _ctx(_file("file")))
        schema = op.request_body.content[MULTIPART_FORM_DATA].schema_
        assert schema.properties["title"].type == "string"
        assert schema.properties["file"].format == "binary"
        assert schema.required == ["title", "file"]

    def test_optional_file_leaves_body_optional(self):
        op = _upload_op("file")
        FormFileFilter().apply(op, _ctx(_file("file", required=False)))
        assert op.request_body.required is None

    def test_other_content_types_kept(self):
        op = Operation(requestBody={"content": {"application/json": {"schema": {"type": "object"}}}})
        FormFileFilter().apply(op, _ctx(_file("file")))
        assert set(op.request_body.content) == {"application/json", MULTIPART_FORM_DATA}

    def test_no_file_parameters_is_noop(self):
        op = _upload_op()
        before = op.model_dump()
        FormFileFilter().apply(op, _ctx(ParameterDescriptor(name="folder")))
        assert op.model_dump() == before
        assert op.request_body is None

    @pytest.mark.parametrize("names,descriptors", [
        (("file",), (_file("file"),)),
        (("files",), (_file("files", is_collection=True),)),
        (("a", "b"), (_file("a"), _file("b", required=False))),
    ])
    def test_idempotent(self, names, descriptors):
        op = _upload_op(*names)
        ctx = _ctx(*descriptors)
        FormFileFilter().apply(op, ctx)
        once = op.model_dump()
        FormFileFilter().apply(op, ctx)
        assert op.model_dump() == once


class TestFormFileFilterWithFormModels:
    def _op(self) -> Operation:
        return Operation(
            parameters=[{"name": "file", "in": "query", "schema": {"type": "object"}}],
            requestBody={"content": {MULTIPART_FORM_DATA: {"schema": {"$ref": "#/components/schemas/UploadForm"}}}},
        )

    def test_referenced_form_model_kept(self):
        op = self._op()
        FormFileFilter().apply(op, _ctx(_file("file")))
        schema = op.request_body.content[MULTIPART_FORM_DATA].schema_
        assert schema.all_of[0].ref_name == "UploadForm"
        files = schema.all_of[1]
        assert files.type == "object"
        assert files.properties["file"].format == "binary"
        assert files.required == ["file"]

    def test_referenced_form_model_idempotent(self):
        op = self._op()
        FormFileFilter().apply(op, _ctx(_file("file")))
        once = op.model_dump()
        FormFileFilter().apply(op, _ctx(_file("file")))
        assert op.model_dump() == once

    def test_untyped_placeholder_replaced(self):
        op = Operation(requestBody={"content": {MULTIPART_FORM_DATA: {"schema": {"type": "object"}}}})
        FormFileFilter().apply(op, _ctx(_file("file")))
        schema = op.request_body.content[MULTIPART_FORM_DATA].schema_
        assert (schema.type, schema.format) == ("string", "binary")
        assert schema.all_of is None
