"""Feature scaffolding tests."""

import logging

import pytest

from clean_scaffold.codegen.core.config import load_config
from clean_scaffold.feature import (
    FEATURE_DIRECTORIES,
    EndpointSpec,
    FeatureScaffolder,
    FeatureSpec,
    FeatureSpecError,
    HttpVerb,
    scaffold_feature,
)


@pytest.fixture
def result(auth_feature):
    return FeatureScaffolder().scaffold(auth_feature)


def test_artifact_order(result):
    assert result.paths() == [
        "data/models/login_body_model.dart",
        "data/models/login_model.dart",
        "data/models/get_profile_param_model.dart",
        "data/models/get_profile_model.dart",
        "data/data_sources/auth_api_service.dart",
        "domain/repositories/auth_repository.dart",
        "data/repositories/auth_repository_impl.dart",
        "domain/use_cases/login_use_case.dart",
        "domain/use_cases/get_profile_use_case.dart",
        "domain/use_cases/logout_use_case.dart",
        "presentation/manager/auth_cubit.dart",
        "presentation/manager/auth_state.dart",
        "auth_di.dart",
    ]
    assert result.root == "auth"
    assert "domain/entities" in result.directories
    assert result.directories == FEATURE_DIRECTORIES


def test_models(result):
    body = result.get("data/models/login_body_model.dart").source_text
    response = result.get("data/models/login_model.dart").source_text

    assert "class LoginBodyModel {" in body
    assert "/// Generated from JSON:" in body
    assert "class User {" in response
    assert "class LoginModel {" in response
    assert "class GetProfileParamModel {" in result.get(
        "data/models/get_profile_param_model.dart"
    ).source_text


def test_api_service(result):
    code = result.get("data/data_sources/auth_api_service.dart").source_text

    assert code.startswith("import 'package:dio/dio.dart';\n")
    assert "import '../models/login_body_model.dart';" in code
    assert "part 'auth_api_service.g.dart';" in code
    assert "@RestApi()\nabstract class AuthApiService {" in code
    assert "factory AuthApiService(Dio dio, {String? baseUrl}) =" in code
    assert "      _AuthApiService;" in code
    assert "  @POST('/auth/login')" in code
    assert "  Future<HttpResponse<LoginModel>> login(\n    @Body() LoginBodyModel request,\n  );" in code
    assert "  @GET('/profile')" in code
    assert "    @Query('id') int? id," in code
    assert "  @DELETE('/auth/logout')" in code
    assert "  Future<HttpResponse<dynamic>> logout();" in code


def test_repository_pair(result):
    interface = result.get("domain/repositories/auth_repository.dart").source_text
    impl = result.get("data/repositories/auth_repository_impl.dart").source_text

    assert "abstract class AuthRepository {" in interface
    assert "  Future<DataState<LoginModel>> login(LoginBodyModel request);" in interface
    assert "  Future<DataState<dynamic>> logout();" in interface

    assert "class AuthRepositoryImpl\n    with BaseRepository\n    implements AuthRepository {" in impl
    assert "  final AuthApiService _apiService;" in impl
    assert "  AuthRepositoryImpl(this._apiService);" in impl
    assert "await handleResponse(response: _apiService.login(request));" in impl
    assert "await handleResponse(response: _apiService.getProfile(request.id));" in impl
    assert "await handleResponse(response: _apiService.logout());" in impl
    assert "import '../../domain/repositories/auth_repository.dart';" in impl
    assert "import '../data_sources/auth_api_service.dart';" in impl


def test_use_cases(result):
    login = result.get("domain/use_cases/login_use_case.dart").source_text
    logout = result.get("domain/use_cases/logout_use_case.dart").source_text

    assert "implements UseCase<DataState<LoginModel>, LoginBodyModel> {" in login
    assert "await _repository.login(params);" in login
    assert "import '../repositories/auth_repository.dart';" in login
    assert "import '../../data/models/login_model.dart';" in login

    assert "class LogoutUseCase\n" in logout
    assert "implements UseCase<DataState<dynamic>, void> {" in logout
    assert "call({required void params}) async =>" in logout
    assert "await _repository.logout();" in logout
    assert "data/models" not in logout


def test_cubit_and_state(result):
    cubit = result.get("presentation/manager/auth_cubit.dart").source_text
    state = result.get("presentation/manager/auth_state.dart").source_text

    assert cubit.startswith("import 'package:bloc/bloc.dart';\n")
    assert "import '../../domain/use_cases/login_use_case.dart';" in cubit
    assert "part 'auth_state.dart';" in cubit
    assert "class AuthCubit extends Cubit<AuthState> {" in cubit
    assert "  final LoginUseCase _loginUseCase;" in cubit
    assert "    this._logoutUseCase,\n  ) : super(AuthState.initial());" in cubit
    assert "  Future<void> login(LoginBodyModel request) => Fetcher.fetchWithBase(" in cubit
    assert "fetcher: _loginUseCase.call(params: request)," in cubit
    assert "fetcher: _logoutUseCase.call(params: null)," in cubit
    assert "state: state.loginState," in cubit
    assert "emitter: (newState) => emit(state.copyWith(loginState: newState))," in cubit

    assert state.startswith("part of 'auth_cubit.dart';\n")
    assert "  final BaseState<LoginModel> loginState;" in state
    assert "    required this.getProfileState," in state
    assert "    BaseState<dynamic>? logoutState," in state
    assert "      loginState: loginState ?? this.loginState," in state
    assert "        logoutState: BaseState.initial()," in state


def test_dependency_registration(result):
    di = result.get("auth_di.dart").source_text

    assert "import 'data/data_sources/auth_api_service.dart';" in di
    assert "import 'presentation/manager/auth_cubit.dart';" in di
    assert "Future<void> authDI() async {" in di
    assert "  locator.registerSingleton(AuthApiService(locator()));" in di
    assert "  locator.registerSingleton<AuthRepository>(\n    AuthRepositoryImpl(locator()),\n  );" in di
    assert "  locator.registerSingleton(LoginUseCase(locator()));" in di
    assert "  locator.registerFactory<AuthCubit>(" in di
    assert di.count("      locator(),") == 3


def test_locator_name_and_core_imports(auth_feature):
    config = load_config(
        "dart",
        {"locator_name": "getIt", "core_imports": "package:app/core/core.dart"},
    )

    result = FeatureScaffolder(config).scaffold(auth_feature)

    di = result.get("auth_di.dart").source_text
    assert "getIt.registerFactory<AuthCubit>(" in di
    assert "locator" not in di
    repository = result.get("domain/repositories/auth_repository.dart").source_text
    assert repository.startswith("import 'package:app/core/core.dart';\n")
    api = result.get("data/data_sources/auth_api_service.dart").source_text
    assert "package:app/core" not in api


def test_not_representable_literal_is_skipped(caplog):
    feature = FeatureSpec(
        name="catalog",
        endpoints=[
            EndpointSpec(
                name="search",
                path="/search",
                verb=HttpVerb.POST,
                request_literal='{"q": "x"}',
                response_literal="[1, 2, 3]",
            )
        ],
    )

    with caplog.at_level(logging.WARNING, logger="clean_scaffold"):
        result = scaffold_feature(feature)

    assert "data/models/search_model.dart" not in result.paths()
    assert "data/models/search_body_model.dart" in result.paths()
    assert any(w.startswith("Skipping SearchModel:") for w in result.warnings)
    assert "Skipping SearchModel" in caplog.text
    api = result.get("data/data_sources/catalog_api_service.dart").source_text
    assert "Future<HttpResponse<dynamic>> search(" in api


def test_deeply_nested_literal_does_not_stop_the_batch():
    feature = FeatureSpec(
        name="catalog",
        endpoints=[
            EndpointSpec(name="a", path="/a", response_literal="[" * 100000),
            EndpointSpec(name="b", path="/b", response_literal='{"id": 1}'),
        ],
    )

    result = scaffold_feature(feature)

    assert "data/models/a_model.dart" not in result.paths()
    assert "class BModel {" in result.get("data/models/b_model.dart").source_text
    assert any(w.startswith("Skipping AModel:") for w in result.warnings)


def test_delete_with_body_literal_sends_body():
    feature = FeatureSpec(
        name="cart",
        endpoints=[
            EndpointSpec(
                name="remove_item",
                path="/cart/items",
                verb=HttpVerb.DELETE,
                request_literal='{"item_id": 7}',
            )
        ],
    )

    result = scaffold_feature(feature)

    api = result.get("data/data_sources/cart_api_service.dart").source_text
    assert "@Body() RemoveItemBodyModel request," in api
    assert "data/models/remove_item_body_model.dart" in result.paths()


def test_query_parameters_for_nested_and_list_fields():
    feature = FeatureSpec(
        name="search",
        endpoints=[
            EndpointSpec(
                name="find",
                path="/find",
                request_literal='{"tags": ["a"], "filter": {"min": 1}, "cursor": null}',
            )
        ],
    )

    result = scaffold_feature(feature)

    api = result.get("data/data_sources/search_api_service.dart").source_text
    assert "    @Query('tags') List<String>? tags," in api
    assert "    @Query('filter') Map<String, dynamic>? filter," in api
    assert "    @Query('cursor') dynamic cursor," in api
    impl = result.get("data/repositories/search_repository_impl.dart").source_text
    assert "_apiService.find(request.tags, request.filter.toJson(), request.cursor)" in impl


def test_invalid_feature_is_rejected():
    with pytest.raises(FeatureSpecError):
        FeatureScaffolder().scaffold(FeatureSpec(name="empty"))


def test_scaffolding_is_deterministic(auth_feature):
    first = FeatureScaffolder().scaffold(auth_feature)
    second = FeatureScaffolder().scaffold(auth_feature)
    assert first.artifacts == second.artifacts
