"""Built-in demo agents.

Used when the registry has neither an agent descriptor nor a standalone
skill for a name, and as the listing when the registry is unreachable.
"""

from ax.core.agent import Agent, AgentSummary, Identity, McpTool, Skill

DEFAULT_MODEL = "claude-3-5-sonnet-latest"
BUILTIN_AUTHOR = "ahmed6ww"


def _context7() -> McpTool:
    return McpTool(
        name="context7",
        command="npx",
        args=("-y", "@upstash/context7-mcp"),
        env={"CONTEXT7_API_KEY": "${CONTEXT7_API_KEY}"},
        setup_url="https://context7.com/dashboard",
    )


RUST_ARCHITECT_PROMPT = """You are a specialized Rust subagent with deep expertise in systems programming.

## Core Principles
- You prefer composition over inheritance
- You use `anyhow` for applications and `thiserror` for libraries
- You strictly follow borrow checker patterns
- You leverage zero-cost abstractions whenever possible
- You write idiomatic Rust that compiles on stable

## Error Handling
- Use `Result<T, E>` for recoverable errors
- Use `panic!` only for unrecoverable bugs
- Provide context with `.context()` from anyhow
- Create custom error types with thiserror for libraries

## Async Patterns
- Use Tokio as the default async runtime
- Prefer `tokio::spawn` for concurrent tasks
- Use `task::spawn_blocking` for CPU-intensive work
- Never block the async runtime

## Memory & Performance
- Minimize allocations where possible
- Use `Cow<str>` for flexible string handling
- Leverage the type system for compile-time guarantees
- Profile before optimizing"""

TOKIO_PATTERNS = """# Tokio Best Practices

## Task Management
- Use `tokio::spawn` for fire-and-forget async tasks
- Use `tokio::spawn_blocking` for CPU-heavy synchronous work
- Use `JoinSet` for managing multiple concurrent tasks

## Channels
- Use `mpsc` for multi-producer, single-consumer scenarios
- Use `broadcast` for pub/sub patterns
- Use `oneshot` for request-response patterns

## Timeouts & Cancellation
- Always set timeouts with `tokio::time::timeout`
- Use `CancellationToken` for graceful shutdown
- Handle `JoinError` for task panics"""

RUST_ERROR_HANDLING = """# Rust Error Handling Patterns

## For Applications (use anyhow)
```rust
use anyhow::{Context, Result};

fn main() -> Result<()> {
    let config = load_config()
        .context("Failed to load configuration")?;
    Ok(())
}
```

## For Libraries (use thiserror)
```rust
use thiserror::Error;

#[derive(Error, Debug)]
pub enum MyError {
    #[error("IO error: {0}")]
    Io(#[from] std::io::Error),
    #[error("Invalid input: {message}")]
    InvalidInput { message: String },
}
```"""

FULLSTACK_NEXT_PROMPT = """You are a full-stack development expert specializing in modern web applications.

## Tech Stack Expertise
- **Frontend**: Next.js 15 with App Router, React 19, TypeScript
- **UI**: ShadcnUI, Tailwind CSS, Radix UI primitives
- **Backend**: FastAPI (Python), SQLAlchemy, Pydantic
- **Database**: PostgreSQL, Redis for caching

## Next.js 15 Patterns
- Use Server Components by default
- Use 'use client' directive only when needed
- Leverage Server Actions for mutations
- Use Suspense for loading states

## API Design
- RESTful endpoints with FastAPI
- Pydantic models for validation
- Proper HTTP status codes
- OpenAPI documentation

## Best Practices
- TypeScript strict mode
- Zod for runtime validation
- React Query for data fetching
- Proper error boundaries"""

NEXTJS_PATTERNS = """# Next.js 15 Patterns

## Server Components (Default)
```tsx
// app/users/page.tsx
async function UsersPage() {
  const users = await fetchUsers();
  return <UserList users={users} />;
}
```

## Client Components
```tsx
'use client';
import { useState } from 'react';

export function Counter() {
  const [count, setCount] = useState(0);
  return <button onClick={() => setCount(c => c + 1)}>{count}</button>;
}
```

## Server Actions
```tsx
'use server';
export async function createUser(formData: FormData) {
  // Runs on the server
}
```"""

QA_TESTING_PROMPT = """You are a QA and testing specialist focused on automated testing.

## Testing Expertise
- **E2E Testing**: Playwright for browser automation
- **Unit Testing**: Jest + React Testing Library
- **API Testing**: Supertest, pytest
- **Performance**: Lighthouse, k6

## Testing Principles
- Write tests that provide confidence, not coverage
- Follow the Testing Trophy (more integration tests)
- Use Page Object Model for E2E tests
- Mock at the network boundary

## Playwright Best Practices
- Use locators that are resilient to change
- Prefer user-visible locators (role, text, label)
- Use fixtures for test setup
- Run tests in parallel

## Jest Patterns
- Test behavior, not implementation
- Use describe blocks for organization
- Mock external dependencies only
- Keep tests focused and fast"""

PLAYWRIGHT_SETUP = """# Playwright Configuration

## playwright.config.ts
```typescript
import { defineConfig } from '@playwright/test';

export default defineConfig({
  testDir: './e2e',
  fullyParallel: true,
  retries: process.env.CI ? 2 : 0,
  reporter: 'html',
  use: {
    baseURL: 'http://localhost:3000',
    trace: 'on-first-retry',
  },
});
```

## Page Object Example
```typescript
export class LoginPage {
  constructor(private page: Page) {}

  async login(email: string, password: string) {
    await this.page.getByLabel('Email').fill(email);
    await this.page.getByLabel('Password').fill(password);
    await this.page.getByRole('button', { name: 'Sign in' }).click();
  }
}
```"""


BUILTIN_AGENTS: dict[str, Agent] = {
    "rust-architect": Agent(
        name="rust-architect",
        version="1.0.0",
        description="Senior Rust Systems Engineer optimized for Tokio & zero-cost abstractions",
        author=BUILTIN_AUTHOR,
        identity=Identity(system_prompt=RUST_ARCHITECT_PROMPT, model=DEFAULT_MODEL, icon="🦀"),
        skills=(
            Skill(
                name="tokio-patterns",
                description="Best practices for async programming with Tokio runtime",
                content=TOKIO_PATTERNS,
            ),
            Skill(
                name="error-handling",
                description="Rust error handling patterns using anyhow and thiserror",
                content=RUST_ERROR_HANDLING,
            ),
        ),
        mcp=(_context7(),),
    ),
    "fullstack-next": Agent(
        name="fullstack-next",
        version="1.0.0",
        description="Next.js 15 + FastAPI + ShadcnUI full-stack expert",
        author=BUILTIN_AUTHOR,
        identity=Identity(system_prompt=FULLSTACK_NEXT_PROMPT, model=DEFAULT_MODEL, icon="⚡"),
        skills=(
            Skill(
                name="nextjs-patterns",
                description="Next.js 15 patterns for Server Components, Client Components, and Server Actions",
                content=NEXTJS_PATTERNS,
            ),
        ),
        mcp=(_context7(),),
    ),
    "qa-testing-squad": Agent(
        name="qa-testing-squad",
        version="1.0.0",
        description="Playwright + Jest testing configuration specialist",
        author=BUILTIN_AUTHOR,
        identity=Identity(system_prompt=QA_TESTING_PROMPT, model=DEFAULT_MODEL, icon="🧪"),
        skills=(
            Skill(
                name="playwright-setup",
                description="Playwright configuration and Page Object Model patterns for E2E testing",
                content=PLAYWRIGHT_SETUP,
            ),
        ),
        mcp=(_context7(),),
    ),
}


def get_builtin_agent(name: str) -> Agent | None:
    """Look up a built-in agent by exact name."""
    return BUILTIN_AGENTS.get(name)


def builtin_summaries() -> list[AgentSummary]:
    """Listing rows for every built-in agent."""
    return [agent.summary() for agent in BUILTIN_AGENTS.values()]
