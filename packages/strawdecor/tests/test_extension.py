import asyncio
from dataclasses import dataclass, field
from typing import Annotated, Optional, Union

import strawberry

from strawdecor import (
    Configuration,
    DecorationExtension,
    DecorationRegistry,
    Decorator,
    ExecutionScope,
    decorate_when,
    decorate_with,
    decorator_metadata,
    scoped_decorator_metadata,
)
from strawdecor import extension as extension_module
from strawdecor.extension import ScopeTable
from strawdecor.interceptor import Interception

REGISTRY = DecorationRegistry()


# ---------------------------------------------------------------------------
# Domain objects
# ---------------------------------------------------------------------------
@dataclass
class Shape:
    name: str
    length: int
    width: int
    children: list = field(default_factory=list)


@dataclass
class Group:
    name: str
    shapes: list = field(default_factory=list)
    labelled: list = field(default_factory=list)
    subgroups: list = field(default_factory=list)


@dataclass
class Region:
    name: str
    groups: list = field(default_factory=list)
    shapes: list = field(default_factory=list)


class RectangleDecorator(Decorator):
    @property
    def kind(self) -> str:
        return "rectangle"

    @property
    def owner(self):
        return self.context.get("owner")

    @property
    def label(self):
        return self.context.get("label")

    @property
    def metadata_keys(self):
        return sorted(self.context)


class SquareDecorator(RectangleDecorator):
    @property
    def kind(self) -> str:
        return "square"


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------
@decorate_when(
    lambda shape: SquareDecorator if shape.length == shape.width else RectangleDecorator,
    registry=REGISTRY,
)
@strawberry.type
class ShapeType:
    name: str
    kind: str
    owner: Optional[str]
    metadata_keys: list[str]
    children: list["ShapeType"]


@decorate_with(RectangleDecorator, registry=REGISTRY)
@decorate_when(lambda shape: SquareDecorator, registry=REGISTRY)
@decorator_metadata(lambda shape: {"label": shape.name}, registry=REGISTRY)
@strawberry.type
class LabelledShapeType:
    name: str
    kind: str
    label: Optional[str]
    metadata_keys: list[str]
    children: list[ShapeType]


@scoped_decorator_metadata(lambda group: {"owner": group.name}, registry=REGISTRY)
@strawberry.type
class GroupType:
    name: str
    shapes: list[ShapeType]
    labelled: list[LabelledShapeType]
    subgroups: list["GroupType"]


@scoped_decorator_metadata(
    lambda region, context: {"region": region.name, "viewer": context["viewer"]},
    registry=REGISTRY,
)
@strawberry.type
class RegionType:
    name: str
    groups: list[GroupType]
    shapes: list[ShapeType]


def build_regions():
    return [
        Region(
            name="north",
            shapes=[Shape("n-square", 2, 2, children=[Shape("n-child", 1, 3)])],
            groups=[
                Group(
                    name="alpha",
                    shapes=[
                        Shape("a-1", 1, 1, children=[
                            Shape("a-1-1", 2, 3, children=[Shape("a-1-1-1", 4, 4)]),
                        ]),
                        Shape("a-2", 1, 2),
                    ],
                    labelled=[Shape("l-1", 5, 5, children=[Shape("l-1-1", 1, 2)])],
                    subgroups=[Group(name="alpha-inner", shapes=[Shape("ai-1", 3, 3)])],
                ),
                Group(name="beta", shapes=[Shape("b-1", 2, 1)]),
            ],
        )
    ]


SHAPES = {"solo": Shape("solo", 3, 3)}


@strawberry.type
class Query:
    @strawberry.field
    def regions(self) -> list[RegionType]:
        return build_regions()

    @strawberry.field
    async def async_regions(self) -> list[RegionType]:
        await asyncio.sleep(0)
        return build_regions()

    @strawberry.field
    def shape(self, name: str) -> Optional[ShapeType]:
        return SHAPES.get(name)

    @strawberry.field
    def shape_tuple(self) -> list[ShapeType]:
        return (Shape("t-1", 1, 1), Shape("t-2", 1, 2))

    @strawberry.field
    def group_grid(self) -> list[list[GroupType]]:
        region = build_regions()[0]
        return [region.groups[:1], [], region.groups[1:]]


CONFIGURATION = Configuration()

schema = strawberry.Schema(
    query=Query,
    extensions=[DecorationExtension.using(configuration=CONFIGURATION, registry=REGISTRY)],
)

REGIONS_QUERY = """
query {
  %s {
    name
    shapes { name kind owner metadataKeys children { name kind owner } }
    groups {
      name
      shapes { name kind owner metadataKeys children { name owner children { name kind owner metadataKeys } } }
      labelled { name kind label metadataKeys children { name owner } }
      subgroups { name shapes { name kind owner metadataKeys } }
    }
  }
}
"""


def run(field_name="regions", *, schema_=schema):
    result = schema_.execute_sync(REGIONS_QUERY % field_name, context_value={"viewer": "vera"})
    assert result.errors is None, result.errors
    return result.data[field_name][0]


def group(region, name):
    return next(g for g in region["groups"] if g["name"] == name)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------
def test_dynamic_selection_within_one_collection():
    alpha = group(run(), "alpha")

    assert [s["kind"] for s in alpha["shapes"]] == ["square", "rectangle"]


def test_scope_inherited_three_levels_down():
    alpha = group(run(), "alpha")
    leaf = alpha["shapes"][0]["children"][0]["children"][0]

    assert leaf["name"] == "a-1-1-1"
    assert leaf["owner"] == "alpha"
    assert leaf["kind"] == "square"
    assert leaf["metadataKeys"] == ["owner"]


def test_nested_scope_replaces_instead_of_merging():
    alpha = group(run(), "alpha")
    inner = alpha["subgroups"][0]["shapes"][0]

    assert inner["owner"] == "alpha-inner"
    # region keys from further up are gone, not merged
    assert inner["metadataKeys"] == ["owner"]


def test_sibling_subtrees_are_isolated():
    region = run()

    region_shape = region["shapes"][0]
    assert region_shape["owner"] is None
    assert region_shape["metadataKeys"] == ["region", "viewer"]
    assert region_shape["children"][0]["owner"] is None

    assert [s["owner"] for s in group(region, "beta")["shapes"]] == ["beta"]
    assert [s["owner"] for s in group(region, "alpha")["shapes"]] == ["alpha", "alpha"]


def test_local_metadata_and_explicit_class_precedence():
    labelled = group(run(), "alpha")["labelled"][0]

    assert labelled["kind"] == "rectangle"
    assert labelled["label"] == "l-1"
    assert labelled["metadataKeys"] == ["label"]
    # local metadata is not propagated; children still see the group scope
    assert labelled["children"][0]["owner"] == "alpha"


def test_absent_value_passes_through():
    result = schema.execute_sync('query { shape(name: "missing") { name } }')

    assert result.errors is None
    assert result.data == {"shape": None}


def test_single_value_decorated_at_root():
    result = schema.execute_sync('query { shape(name: "solo") { name kind owner metadataKeys } }')

    assert result.errors is None
    assert result.data == {"shape": {"name": "solo", "kind": "square", "owner": None, "metadataKeys": []}}


def test_async_resolvers_are_decorated_after_await():
    async def main():
        return await schema.execute(REGIONS_QUERY % "asyncRegions", context_value={"viewer": "vera"})

    result = asyncio.run(main())

    assert result.errors is None, result.errors
    region = result.data["asyncRegions"][0]
    assert group(region, "alpha")["shapes"][0]["children"][0]["children"][0]["owner"] == "alpha"
    assert region["shapes"][0]["metadataKeys"] == ["region", "viewer"]


def test_block_errors_surface_as_field_errors():
    registry = DecorationRegistry()

    def broken(shape):
        raise ValueError("cannot pick a decorator")

    @decorate_when(broken, registry=registry)
    @strawberry.type
    class BrokenShapeType:
        name: str

    @strawberry.type
    class BrokenQuery:
        @strawberry.field
        def shape(self) -> Optional[BrokenShapeType]:
            return Shape("x", 1, 1)

    broken_schema = strawberry.Schema(
        query=BrokenQuery,
        extensions=[DecorationExtension.using(configuration=Configuration(), registry=registry)],
    )

    result = broken_schema.execute_sync("query { shape { name } }")

    assert result.data == {"shape": None}
    assert result.errors is not None
    assert "cannot pick a decorator" in result.errors[0].message


def test_tracing_enabled_schema_still_decorates():
    traced = strawberry.Schema(
        query=Query,
        extensions=[
            DecorationExtension.using(configuration=Configuration(trace_decoration=True), registry=REGISTRY)
        ],
    )

    alpha = group(run(schema_=traced), "alpha")

    assert [s["kind"] for s in alpha["shapes"]] == ["square", "rectangle"]


def test_using_binds_collaborators():
    configuration = Configuration()
    bound = DecorationExtension.using(configuration=configuration)

    assert issubclass(bound, DecorationExtension)
    assert bound.configuration is configuration
    assert bound.registry is None
    assert DecorationExtension.configuration is None


def test_scope_table_uses_longest_recorded_prefix():
    table = ScopeTable()
    root = ExecutionScope.root()
    region = root.derive({"region": "north"})
    group_scope = region.derive({"owner": "alpha"})

    table.record(("regions",), root, Interception([], root, (region,)))
    table.record(("regions", 0, "groups"), region, Interception([], region, (group_scope, region)))

    assert table.parent_of(("regions",)) is root
    assert table.parent_of(("regions", 0, "name")) is region
    assert table.parent_of(("regions", 0, "groups", 0, "shapes")) is group_scope
    # element 1 kept its parent's scope, so nothing was recorded for it
    assert table.parent_of(("regions", 0, "groups", 1, "shapes")) is region
    assert len(table) == 2


def test_list_field_returning_a_tuple_is_decorated_element_wise():
    result = schema.execute_sync("query { shapeTuple { name kind } }")

    assert result.errors is None, result.errors
    assert result.data == {"shapeTuple": [{"name": "t-1", "kind": "square"}, {"name": "t-2", "kind": "rectangle"}]}


def test_nested_lists_thread_scopes_per_inner_element():
    result = schema.execute_sync("query { groupGrid { name shapes { name owner metadataKeys } } }")

    assert result.errors is None, result.errors
    first, empty, last = result.data["groupGrid"]
    assert [g["name"] for g in first] == ["alpha"]
    assert [s["owner"] for s in first[0]["shapes"]] == ["alpha", "alpha"]
    assert empty == []
    assert [s["owner"] for s in last[0]["shapes"]] == ["beta"]
    assert last[0]["shapes"][0]["metadataKeys"] == ["owner"]


def test_tracing_records_decorator_resolution_on_the_span(monkeypatch):
    recorded = []

    def record(span, attributes):
        recorded.append(dict(attributes))

    monkeypatch.setattr(extension_module, "apply_attributes", record)
    traced = strawberry.Schema(
        query=Query,
        extensions=[
            DecorationExtension.using(configuration=Configuration(trace_decoration=True), registry=REGISTRY)
        ],
    )

    result = traced.execute_sync('query { shape(name: "solo") { kind } shapeTuple { kind } }')

    assert result.errors is None, result.errors
    single, many = recorded
    assert single["strawdecor.decorator.branch"] == "dynamic"
    assert single["strawdecor.decorator.label"].endswith("SquareDecorator")
    assert many["strawdecor.decorator.count"] == 2
    assert many["strawdecor.decorator.branches"] == ["dynamic"]


# ---------------------------------------------------------------------------
# Interface and union fields
# ---------------------------------------------------------------------------
ABSTRACT_REGISTRY = DecorationRegistry()


class BadgeDecorator(Decorator):
    @property
    def kind(self) -> str:
        return "decorated"

    @property
    def owner(self):
        return self.context.get("owner")


@strawberry.interface
class Named:
    name: str


@decorate_with(BadgeDecorator, registry=ABSTRACT_REGISTRY)
@strawberry.type
class BadgeType(Named):
    kind: str
    owner: Optional[str]


@strawberry.type
class PlainType(Named):
    kind: str


@scoped_decorator_metadata(lambda team: {"owner": team.name}, registry=ABSTRACT_REGISTRY)
@strawberry.type
class TeamType(Named):
    members: list[Named]


Item = Annotated[Union[BadgeType, PlainType], strawberry.union("Item")]


def badge(name):
    return BadgeType(name=name, kind="raw", owner=None)


@strawberry.type
class AbstractQuery:
    @strawberry.field
    def badge(self) -> Optional[BadgeType]:
        return badge("direct")

    @strawberry.field
    def named(self) -> Named:
        return badge("via-interface")

    @strawberry.field
    def items(self) -> list[Item]:
        return [badge("via-union"), PlainType(name="plain", kind="raw")]

    @strawberry.field
    def teams(self) -> list[Named]:
        return [TeamType(name="red", members=[badge("r-1")]), TeamType(name="blue", members=[badge("b-1")])]


abstract_schema = strawberry.Schema(
    query=AbstractQuery,
    types=[BadgeType, PlainType, TeamType],
    extensions=[DecorationExtension.using(configuration=Configuration(), registry=ABSTRACT_REGISTRY)],
)


def test_interface_field_decorates_the_concrete_type():
    result = abstract_schema.execute_sync(
        "query { badge { kind } named { name ... on BadgeType { kind } } }"
    )

    assert result.errors is None, result.errors
    assert result.data["badge"] == {"kind": "decorated"}
    assert result.data["named"] == {"name": "via-interface", "kind": "decorated"}


def test_union_field_decorates_each_member_by_its_own_type():
    result = abstract_schema.execute_sync(
        "query { items { __typename ... on BadgeType { kind } ... on PlainType { kind } } }"
    )

    assert result.errors is None, result.errors
    assert result.data["items"] == [
        {"__typename": "BadgeType", "kind": "decorated"},
        {"__typename": "PlainType", "kind": "raw"},
    ]


def test_scoped_metadata_flows_through_interface_fields():
    result = abstract_schema.execute_sync(
        "query { teams { name ... on TeamType { members { name ... on BadgeType { owner } } } } }"
    )

    assert result.errors is None, result.errors
    assert [[m["owner"] for m in team["members"]] for team in result.data["teams"]] == [["red"], ["blue"]]
