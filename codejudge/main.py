import logging
import os
import shutil
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from .config import EngineConfig, load_config
from .errors import JudgeError
from .executor import ExecutionEngine
from .schemas import ErrorResponse, ExecutionRequest, ExecutionSummary

logger = logging.getLogger(__name__)


def create_app(config: Optional[EngineConfig] = None, engine: Optional[ExecutionEngine] = None) -> FastAPI:
    engine = engine or ExecutionEngine(config or load_config())
    app = FastAPI(title='Code Judge')

    @app.get('/health')
    def health() -> Dict[str, Any]:
        return {
            'status': 'ok',
            'compiler': engine.config.compiler,
            'compiler_available': shutil.which(engine.config.compiler) is not None,
            'compile_timeout_seconds': engine.config.compile_timeout_seconds,
            'execution_timeout_seconds': engine.config.execution_timeout_seconds,
        }

    # sync handler: FastAPI runs it in the threadpool, one worker per request
    @app.post('/execute', response_model=ExecutionSummary, responses={400: {'model': ErrorResponse}})
    def run_code(req: ExecutionRequest):
        try:
            summary = engine.run(req)
        except JudgeError as e:
            logger.info('execution rejected (%s): %s', e.kind, e)
            body = ErrorResponse(error=str(e), kind=e.kind)
            return JSONResponse(status_code=400, content=body.model_dump())
        except Exception as e:
            logger.exception('execution error')
            raise HTTPException(status_code=500, detail='execution error') from e
        return summary

    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s | %(levelname)s | %(name)s | %(message)s')
    try:
        app = create_app()
        uvicorn.run(
            app,
            host=os.getenv('CODEJUDGE_HOST', '127.0.0.1'),
            port=int(os.getenv('CODEJUDGE_PORT', '8000')),
        )
    except Exception:
        logger.exception('server failed to start')
        raise


if __name__ == '__main__':
    main()
