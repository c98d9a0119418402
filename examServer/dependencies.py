from fastapi import Request


def get_database(request: Request):
    return request.app.state.database


def get_code_runner(request: Request):
    return request.app.state.code_runner


def get_app_settings(request: Request):
    return request.app.state.settings
