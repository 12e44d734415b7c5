"""Validation rules for cloud profiles, control planes, infrastructure, secrets, shoots and workers."""