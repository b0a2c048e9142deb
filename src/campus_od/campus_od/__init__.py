"""Campus OD Portal package.

Feature modules (users, attendance, events, od_requests) each carry a domain
model, a repository interface with MySQL and in-memory implementations, a
service holding the business rules and a thin Flask controller. The `client`
package is the Python consumer of the HTTP API.
"""
