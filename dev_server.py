#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
开发调试入口 - 用于 mcp dev 命令

使用方法:
    VSPHERE_HOST=... VSPHERE_USERNAME=... VSPHERE_PASSWORD=... \
        uv run mcp dev dev_server.py:mcp
"""

from vsphere_ops.server import mcp, run_server

__all__ = ["mcp"]

if __name__ == "__main__":
    run_server()
