"""Tests for routesfile.codegen — rendering route lists into modules."""

import ast
import types
from collections.abc import Callable

import pytest

from routesfile.codegen import RoutesCodeGenerator, generate_routes_module, to_dispatcher_path
from routesfile.config import GeneratorConfig
from routesfile.errors import EmitError
from routesfile.model import HttpMethod, MethodParameter, PathParameter, RouteDefinition
from routesfile.parser import parse_routes
from routesfile.runtime import Router


def _route(
    method: str,
    path: str,
    controller: str,
    action: str,
    path_params: tuple[PathParameter, ...] = (),
    method_params: tuple[MethodParameter, ...] = (),
) -> RouteDefinition:
    return RouteDefinition(
        method=HttpMethod(method),
        path=path,
        controller=controller,
        action=action,
        path_parameters=path_params,
        method_parameters=method_params,
        line_number=1,
    )


def _module_fields(source: str) -> list[str]:
    """Names assigned at module level, excluding ``__all__``."""
    tree = ast.parse(source)
    return [
        node.targets[0].id
        for node in tree.body
        if isinstance(node, ast.Assign)
        and isinstance(node.targets[0], ast.Name)
        and node.targets[0].id != "__all__"
    ]


BLOG = (
    "GET /blog/:year/:month/:slug "
    "fakeapp.controllers.BlogController.showPost(year: Int, month: Int, slug: String)"
)


class TestDispatcherPath:
    def test_rewrites_captures(self) -> None:
        assert to_dispatcher_path("/users/:id/posts/:postId") == "/users/{id}/posts/{postId}"

    def test_static_untouched(self) -> None:
        assert to_dispatcher_path("/api/v1/users") == "/api/v1/users"

    def test_embedded_capture(self) -> None:
        assert to_dispatcher_path("/files/:name.txt") == "/files/{name}.txt"


class TestModuleLayout:
    def test_valid_python(self) -> None:
        source = generate_routes_module(parse_routes(BLOG))
        ast.parse(source)

    def test_header(self) -> None:
        source = generate_routes_module(parse_routes(BLOG), source_name="conf/routes")
        lines = source.splitlines()
        assert lines[0] == "# Generated code from routes file: conf/routes"
        assert lines[1] == "# Do not edit manually!"

    def test_public_surface(self) -> None:
        source = generate_routes_module(parse_routes(BLOG))
        assert '__all__ = ["configure_routes"]' in source
        assert "def configure_routes(router: runtime.Router) -> None:" in source

    def test_custom_function_name(self) -> None:
        config = GeneratorConfig(function_name="register")
        source = generate_routes_module(parse_routes(BLOG), config=config)
        assert "def register(router: runtime.Router) -> None:" in source
        assert '__all__ = ["register"]' in source

    def test_imports(self) -> None:
        source = generate_routes_module(parse_routes(BLOG))
        assert "from fakeapp.controllers import BlogController" in source
        assert "import routesfile.runtime as runtime" in source

    def test_single_trailing_newline(self) -> None:
        source = generate_routes_module(parse_routes(BLOG))
        assert source.endswith(")\n")
        assert not source.endswith("\n\n")

    def test_empty_route_list(self) -> None:
        source = generate_routes_module([])
        ast.parse(source)
        assert _module_fields(source) == []


class TestRegistrations:
    def test_route_decorator(self) -> None:
        source = generate_routes_module(
            [
                _route(
                    "GET",
                    "/users/:id",
                    "app.UserController",
                    "show",
                    path_params=(PathParameter("id", "String"),),
                    method_params=(MethodParameter("id", "String"),),
                )
            ]
        )
        assert '@router.route("GET", "/users/{id}", name="get_users_id")' in source
        assert "def get_users_id(call: runtime.Call) -> object:" in source
        assert 'id = runtime.path_param(call, "id")' in source
        assert "return userController.show(call, id)" in source

    def test_blog_coercions_and_argument_order(self) -> None:
        source = generate_routes_module(parse_routes(BLOG))
        assert 'year = runtime.to_int(runtime.path_param(call, "year"), "year", "Int")' in source
        assert 'month = runtime.to_int(runtime.path_param(call, "month"), "month", "Int")' in source
        assert 'slug = runtime.path_param(call, "slug")' in source
        assert "return blogController.showPost(call, year, month, slug)" in source

    def test_query_parameters_follow_path_parameters(self) -> None:
        routes = parse_routes(
            "GET /users/:id fakeapp.controllers.UserController.show("
            "verbose: Boolean, id: Long, fields: String)"
        )
        source = generate_routes_module(routes)
        assert 'id = runtime.to_long(runtime.path_param(call, "id"), "id", "Long")' in source
        assert (
            'verbose = runtime.to_boolean(runtime.query_param(call, "verbose"), '
            '"verbose", "Boolean")' in source
        )
        assert 'fields = runtime.query_param(call, "fields")' in source
        assert "return userController.show(call, id, verbose, fields)" in source

    @pytest.mark.parametrize(
        ("type_name", "coercer"),
        [
            ("Int", "to_int"),
            ("lang.Int", "to_int"),
            ("Integer", "to_int"),
            ("Long", "to_long"),
            ("Double", "to_double"),
            ("Float", "to_float"),
            ("Boolean", "to_boolean"),
        ],
    )
    def test_coercer_per_type(self, type_name: str, coercer: str) -> None:
        routes = parse_routes(f"GET /x/:v fakeapp.controllers.ApiController.get(v: {type_name})")
        source = generate_routes_module(routes)
        assert f"runtime.{coercer}(" in source
        assert f'"v", "{type_name}")' in source

    def test_unknown_type_is_raw_string(self) -> None:
        routes = parse_routes("GET /x/:v fakeapp.controllers.ApiController.get(v: UUID)")
        source = generate_routes_module(routes)
        assert 'v = runtime.path_param(call, "v")' in source
        assert "runtime.to_" not in source

    def test_source_order_preserved(self) -> None:
        routes = parse_routes(
            "\n".join(
                [
                    "POST /z fakeapp.controllers.ApiController.z()",
                    "GET /a fakeapp.controllers.ApiController.a()",
                    "DELETE /m fakeapp.controllers.ApiController.m()",
                ]
            )
        )
        source = generate_routes_module(routes)
        positions = [source.index(f"name=\"{name}\"") for name in ("post_z", "get_a", "delete_m")]
        assert positions == sorted(positions)

    def test_duplicate_method_and_path_both_registered(self) -> None:
        routes = parse_routes(
            "GET /users fakeapp.controllers.UserController.list()\n"
            "GET /users fakeapp.controllers.UserController.listAll()"
        )
        source = generate_routes_module(routes)
        assert source.count('@router.route("GET", "/users", name="get_users")') == 2
        assert "userController.list(call)" in source
        assert "userController.listAll(call)" in source

    def test_keyword_parameter_names_are_renamed(self) -> None:
        routes = parse_routes("GET /s fakeapp.controllers.SearchController.find(from: Int)")
        source = generate_routes_module(routes)
        assert 'from_ = runtime.to_int(runtime.query_param(call, "from"), "from", "Int")' in source
        assert "searchController.find(call, from_)" in source
        ast.parse(source)

    def test_parameter_named_call_does_not_shadow_context(self) -> None:
        routes = parse_routes("GET /s fakeapp.controllers.SearchController.find(call: String)")
        source = generate_routes_module(routes)
        assert 'call_ = runtime.query_param(call, "call")' in source
        assert "searchController.find(call, call_)" in source

    @pytest.mark.parametrize(
        ("declared", "first", "second"),
        [
            ("call_: String, call: String", "call_", "call__"),
            ("call: String, call_: String", "call_", "call__"),
            ("from_: Int, from: Int", "from_", "from__"),
            ("runtime_: String, runtime: String", "runtime_", "runtime__"),
        ],
    )
    def test_renamed_locals_stay_distinct(self, declared: str, first: str, second: str) -> None:
        routes = parse_routes(f"GET /s fakeapp.controllers.SearchController.find({declared})")
        source = generate_routes_module(routes)
        assert f"searchController.find(call, {first}, {second})" in source

    def test_static_punctuation_gives_valid_function_name(self) -> None:
        routes = parse_routes("GET /sitemap.xml fakeapp.controllers.HomeController.sitemap()")
        source = generate_routes_module(routes)
        assert 'name="get_sitemap.xml"' in source
        assert "def get_sitemap_xml(call: runtime.Call)" in source
        ast.parse(source)


class TestControllerFields:
    def test_one_field_per_controller(self) -> None:
        routes = parse_routes(
            "\n".join(
                [
                    "GET / fakeapp.controllers.HomeController.index()",
                    "GET /about fakeapp.controllers.HomeController.about()",
                    "GET /users fakeapp.controllers.UserController.list()",
                ]
            )
        )
        source = generate_routes_module(routes)
        assert _module_fields(source) == ["homeController", "userController"]
        assert source.count("homeController = HomeController()") == 1

    def test_imports_grouped_by_module(self) -> None:
        routes = parse_routes(
            "\n".join(
                [
                    "GET / a.web.HomeController.index()",
                    "GET /u b.web.UserController.list()",
                    "GET /p a.web.PageController.show()",
                ]
            )
        )
        source = generate_routes_module(routes)
        assert (
            "from a.web import HomeController, PageController\nfrom b.web import UserController"
            in source
        )

    def test_bare_controller_resolves_against_package(self) -> None:
        routes = parse_routes("GET / HomeController.index()")
        source = generate_routes_module(routes, package="myapp.web")
        assert "from myapp.web import HomeController" in source

    def test_bare_controller_without_package(self) -> None:
        routes = parse_routes("GET / HomeController.index()")
        with pytest.raises(EmitError, match="no target package"):
            generate_routes_module(routes)

    def test_field_name_collision(self) -> None:
        routes = parse_routes(
            "GET /a one.HomeController.index()\nGET /b two.HomeController.index()"
        )
        with pytest.raises(EmitError, match="share the field name 'homeController'"):
            generate_routes_module(routes)

    def test_field_shadowing_generated_name(self) -> None:
        routes = parse_routes("GET / app.Router.index()")
        with pytest.raises(EmitError, match="shadow"):
            generate_routes_module(routes)

    def test_controller_fields_api(self) -> None:
        routes = parse_routes("GET / HomeController.index()\nGET /x app.X.y()")
        fields = RoutesCodeGenerator().controller_fields(routes, "pkg")
        assert [(f.module, f.class_name, f.field_name) for f in fields] == [
            ("pkg", "HomeController", "homeController"),
            ("app", "X", "x"),
        ]


class TestDeterminism:
    def test_byte_identical(self) -> None:
        routes = parse_routes(
            "\n".join(
                [
                    BLOG,
                    "GET / fakeapp.controllers.HomeController.index()",
                    "GET /search fakeapp.controllers.SearchController.find(q: String, page: Int)",
                ]
            )
        )
        generator = RoutesCodeGenerator()
        first = generator.generate(routes, source_name="routes")
        second = generator.generate(routes, source_name="routes")
        third = RoutesCodeGenerator().generate(list(routes), source_name="routes")
        assert first == second == third


class TestGeneratedModuleRuns:
    def test_blog_route_invokes_action(
        self,
        fake_app: types.ModuleType,
        load_module: Callable[[str], types.ModuleType],
    ) -> None:
        module = load_module(generate_routes_module(parse_routes(BLOG)))
        router = Router()
        module.configure_routes(router)

        route = router.routes[0]
        assert route.name == "get_blog_year_month_slug"
        assert route.path == "/blog/{year}/{month}/{slug}"

        response = router.handle("GET", "/blog/2024/05/hello-world")
        assert response.status == 200
        assert response.body == str(
            {"controller": "BlogController", "action": "showPost", "args": (2024, 5, "hello-world")}
        )

    def test_single_shared_controller_instance(
        self,
        fake_app: types.ModuleType,
        load_module: Callable[[str], types.ModuleType],
    ) -> None:
        routes = parse_routes(
            "GET / fakeapp.controllers.HomeController.index()\n"
            "GET /about fakeapp.controllers.HomeController.about()"
        )
        module = load_module(generate_routes_module(routes))
        assert isinstance(module.homeController, fake_app.HomeController)
        assert module.__all__ == ["configure_routes"]

    def test_query_values_are_coerced(
        self,
        fake_app: types.ModuleType,
        load_module: Callable[[str], types.ModuleType],
    ) -> None:
        routes = parse_routes(
            "GET /search fakeapp.controllers.SearchController.find("
            "q: String, page: Int, exact: Boolean)"
        )
        module = load_module(generate_routes_module(routes))
        router = Router()
        module.configure_routes(router)

        response = router.handle("GET", "/search?q=python&page=3&exact=true")
        assert response.status == 200
        assert "('python', 3, True)" in response.text

    def test_malformed_value_is_bad_request(
        self,
        fake_app: types.ModuleType,
        load_module: Callable[[str], types.ModuleType],
    ) -> None:
        module = load_module(generate_routes_module(parse_routes(BLOG)))
        router = Router()
        module.configure_routes(router)

        response = router.handle("GET", "/blog/twenty/05/hello")
        assert response.status == 400
        assert "year" in response.text

    def test_missing_query_value_is_bad_request(
        self,
        fake_app: types.ModuleType,
        load_module: Callable[[str], types.ModuleType],
    ) -> None:
        routes = parse_routes("GET /search fakeapp.controllers.SearchController.find(q: String)")
        module = load_module(generate_routes_module(routes))
        router = Router()
        module.configure_routes(router)

        response = router.handle("GET", "/search")
        assert response.status == 400
        assert response.text == "Missing query parameter: q"

    def test_package_level_controller(
        self,
        fake_app: types.ModuleType,
        load_module: Callable[[str], types.ModuleType],
    ) -> None:
        routes = parse_routes("GET / RootController.index()")
        module = load_module(generate_routes_module(routes, package="fakeapp"))
        router = Router()
        module.configure_routes(router)

        response = router.handle("GET", "/")
        assert "'RootController'" in response.text

    def test_colliding_renames_pass_each_value(
        self,
        fake_app: types.ModuleType,
        load_module: Callable[[str], types.ModuleType],
    ) -> None:
        routes = parse_routes(
            "GET /s fakeapp.controllers.SearchController.find(call_: String, call: String)"
        )
        module = load_module(generate_routes_module(routes))
        router = Router()
        module.configure_routes(router)

        response = router.handle("GET", "/s?call_=first&call=second")
        assert response.status == 200
        assert "'args': ('first', 'second')" in response.text
