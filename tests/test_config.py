from seniormatch.config.settings import Settings, _env_bool, settings


def test_settings_defaults_present():
    assert isinstance(settings.default_region, str) and settings.default_region
    assert isinstance(settings.openai_model_rerank, str)
    assert isinstance(settings.rerank_top_k, int)
    assert isinstance(settings.use_rag, bool)
    assert settings.data_dir


def test_env_bool_parsing(monkeypatch):
    monkeypatch.setenv("SENIORMATCH_TEST_FLAG", "Yes")
    assert _env_bool("SENIORMATCH_TEST_FLAG", default=False) is True
    monkeypatch.setenv("SENIORMATCH_TEST_FLAG", "off")
    assert _env_bool("SENIORMATCH_TEST_FLAG", default=True) is False
    monkeypatch.delenv("SENIORMATCH_TEST_FLAG")
    assert _env_bool("SENIORMATCH_TEST_FLAG", default=True) is True


def test_settings_override():
    custom = Settings(default_region="울산", retrieval_limit=4)
    assert custom.default_region == "울산"
    assert custom.retrieval_limit == 4


def test_request_ctx_scope_nests_and_resets():
    from seniormatch.common.logging_ctx import get_request_ctx, request_ctx_scope

    assert get_request_ctx() == {}
    with request_ctx_scope(request_id="abc"):
        with request_ctx_scope(partition="job"):
            assert get_request_ctx() == {"request_id": "abc", "partition": "job"}
        assert get_request_ctx() == {"request_id": "abc"}
    assert get_request_ctx() == {}
