"""Static CI/CD workflow templates."""

from __future__ import annotations

from dataclasses import dataclass


def _or_default(value: str | None, default: str) -> str:
    if value and value.strip():
        return value.strip()
    return default


def github_secret(name: str) -> str:
    return "${{ secrets." + name + " }}"


def gitlab_var(name: str) -> str:
    return "$" + name


@dataclass
class GithubDeployOptions:
    branch: str | None = None
    node_version: str | None = None
    build_output_dir: str | None = None
    target_path: str | None = None
    server_host_secret: str | None = None
    server_user_secret: str | None = None
    ssh_private_key_secret: str | None = None


@dataclass
class GitlabDeployOptions:
    deploy_branch: str | None = None
    node_image: str | None = None
    build_output_dir: str | None = None
    target_path: str | None = None
    server_host_var: str | None = None
    server_user_var: str | None = None
    ssh_private_key_var: str | None = None


def generate_github_deploy_workflow(options: GithubDeployOptions) -> str:
    branch = _or_default(options.branch, "main")
    node_version = _or_default(options.node_version, "18")
    build_dir = _or_default(options.build_output_dir, "dist")
    target_path = _or_default(options.target_path, "/var/www/my-app")
    host = github_secret(_or_default(options.server_host_secret, "SERVER_HOST"))
    user = github_secret(_or_default(options.server_user_secret, "SERVER_USER"))
    key = github_secret(_or_default(options.ssh_private_key_secret, "SSH_PRIVATE_KEY"))

    return f"""name: Node.js CI/CD

on:
  push:
    branches: [ {branch} ]

jobs:
  build-and-deploy:
    runs-on: ubuntu-latest

    steps:
      - name: Checkout
        uses: actions/checkout@v4

      - name: Setup Node.js
        uses: actions/setup-node@v4
        with:
          node-version: "{node_version}"
          cache: "npm"

      - name: Install and build
        run: |
          npm install
          npm run build --if-present

      - name: Upload files (SCP)
        uses: appleboy/scp-action@v0.1.7
        with:
          host: {host}
          username: {user}
          key: {key}
          source: "{build_dir}/*,package.json"
          target: "{target_path}"

      - name: Run remote commands
        uses: appleboy/ssh-action@v1.0.3
        with:
          host: {host}
          username: {user}
          key: {key}
          script: |
            cd {target_path}
            npm install --production
            pm2 restart all || pm2 start server.js
"""


def generate_gitlab_deploy_workflow(options: GitlabDeployOptions) -> str:
    node_image = _or_default(options.node_image, "node:18")
    deploy_branch = _or_default(options.deploy_branch, "main")
    build_dir = _or_default(options.build_output_dir, "dist")
    target_path = _or_default(options.target_path, "/var/www/my-app")
    host = gitlab_var(_or_default(options.server_host_var, "SERVER_HOST"))
    user = gitlab_var(_or_default(options.server_user_var, "SERVER_USER"))
    key = gitlab_var(_or_default(options.ssh_private_key_var, "SSH_PRIVATE_KEY"))

    return f"""stages:
  - build
  - deploy

image: {node_image}

cache:
  paths:
    - node_modules/

build_job:
  stage: build
  script:
    - npm install
    - npm run build
  artifacts:
    paths:
      - {build_dir}/
    expire_in: 1 hour

deploy_job:
  stage: deploy
  before_script:
    - 'command -v ssh-agent >/dev/null || ( apt-get update -y && apt-get install openssh-client -y )'
    - eval $(ssh-agent -s)
    - echo "{key}" | tr -d '\\r' | ssh-add -
    - mkdir -p ~/.ssh
    - chmod 700 ~/.ssh
    - ssh-keyscan {host} >> ~/.ssh/known_hosts
  script:
    - scp -r {build_dir}/* {user}@{host}:{target_path}
    - ssh {user}@{host} "cd {target_path} && pm2 restart all"
  only:
    - {deploy_branch}
"""
